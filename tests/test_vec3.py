"""Tests for Vec3 class."""

import pytest
import math
import numpy as np

from pathforge.vec3 import Vec3, Point3, Color


class TestVec3Creation:
    """Test Vec3 construction."""

    def test_default_constructor(self):
        v = Vec3()
        assert v.x == 0.0
        assert v.y == 0.0
        assert v.z == 0.0

    def test_value_constructor(self):
        v = Vec3(1.0, 2.0, 3.0)
        assert v.x == 1.0
        assert v.y == 2.0
        assert v.z == 3.0

    def test_from_array(self):
        arr = np.array([1.0, 2.0, 3.0])
        v = Vec3.from_array(arr)
        assert v.components() == (1.0, 2.0, 3.0)

    def test_color_aliases(self):
        c = Color(0.5, 0.6, 0.7)
        assert c.r == 0.5
        assert c.g == 0.6
        assert c.b == 0.7

    def test_constants(self):
        assert Vec3.ZERO.components() == (0.0, 0.0, 0.0)
        assert Vec3.ONE.components() == (1.0, 1.0, 1.0)
        assert Point3 is Vec3
        assert Color is Vec3

    def test_unpacking(self):
        x, y, z = Vec3(1, 2, 3)
        assert (x, y, z) == (1.0, 2.0, 3.0)


class TestVec3Arithmetic:
    """Test Vec3 arithmetic operations."""

    def test_negation(self):
        neg = -Vec3(1, 2, 3)
        assert neg.components() == (-1.0, -2.0, -3.0)

    def test_addition(self):
        result = Vec3(1, 2, 3) + Vec3(4, 5, 6)
        assert result.components() == (5.0, 7.0, 9.0)

    def test_subtraction(self):
        result = Vec3(4, 5, 6) - Vec3(1, 2, 3)
        assert result.components() == (3.0, 3.0, 3.0)

    def test_scale(self):
        assert (Vec3(1, 2, 3) * 2).components() == (2.0, 4.0, 6.0)
        assert (2 * Vec3(1, 2, 3)).components() == (2.0, 4.0, 6.0)

    def test_schur_product(self):
        result = Vec3(1, 2, 3).schur(Vec3(2, 3, 4))
        assert result.components() == (2.0, 6.0, 12.0)

    def test_division(self):
        result = Vec3(2, 4, 6) / 2
        assert result.components() == (1.0, 2.0, 3.0)

    def test_operations_do_not_mutate(self):
        v = Vec3(1, 2, 3)
        _ = v + Vec3(1, 1, 1)
        _ = v * 5
        _ = v.normalize()
        assert v.components() == (1.0, 2.0, 3.0)


class TestVec3VectorOps:
    """Test Vec3 vector operations."""

    def test_length(self):
        v = Vec3(3, 4, 0)
        assert v.length() == 5.0
        assert v.length_squared() == 25.0

    def test_normalize(self, rng):
        for _ in range(100):
            v = Vec3.random(rng, -10, 10)
            assert abs(v.normalize().length() - 1.0) < 1e-10

    def test_normalize_zero_vector_raises(self):
        with pytest.raises(ValueError):
            Vec3(0, 0, 0).normalize()

    def test_dot_product(self):
        assert Vec3(1, 0, 0).dot(Vec3(0, 1, 0)) == 0.0
        assert Vec3(1, 2, 3).dot(Vec3(4, 5, 6)) == 32.0  # 1*4 + 2*5 + 3*6

    def test_cross_product(self):
        cross = Vec3(1, 0, 0).cross(Vec3(0, 1, 0))
        assert cross.components() == (0.0, 0.0, 1.0)

    def test_sqrt(self):
        result = Vec3(4, 9, 0.25).sqrt()
        assert result.components() == (2.0, 3.0, 0.5)

    def test_reflect(self):
        # Ray coming in at 45 degrees
        incoming = Vec3(1, -1, 0).normalize()
        normal = Vec3(0, 1, 0)
        reflected = incoming.reflect(normal)
        assert reflected == Vec3(1, 1, 0).normalize()

    def test_reflect_preserves_length(self, rng):
        normal = Vec3(0, 0, 1)
        for _ in range(50):
            v = Vec3.random(rng, -3, 3)
            assert abs(v.reflect(normal).length() - v.length()) < 1e-10


class TestVec3Refract:
    """Test Vec3 refraction."""

    def test_refract_air_to_glass_bends_toward_normal(self):
        incoming = Vec3(1, -1, 0).normalize()
        normal = Vec3(0, 1, 0)
        refracted = incoming.refract(normal, 1.0 / 1.5)
        # Smaller angle from the (inward) normal than the incoming ray
        assert refracted.y < 0
        assert abs(refracted.x) < abs(incoming.x)
        assert abs(refracted.length() - 1.0) < 1e-10

    def test_unit_ratio_is_identity(self, rng):
        normal = Vec3(0, 1, 0)
        for _ in range(50):
            incoming = Vec3.random(rng, -1, 1)
            incoming = Vec3(incoming.x, -abs(incoming.y) - 0.1, incoming.z).normalize()
            assert incoming.refract(normal, 1.0) == incoming

    def test_snell_round_trip(self):
        eta = 1.0 / 1.33
        incoming = Vec3(0.5, -1, 0.2).normalize()
        normal = Vec3(0, 1, 0)
        inside = incoming.refract(normal, eta)
        # Leaving through a parallel face restores the original direction
        back_out = inside.refract(normal, 1.0 / eta)
        assert back_out == incoming

    def test_snell_law_holds(self):
        eta = 1.0 / 1.5
        incoming = Vec3(0.6, -0.8, 0)
        refracted = incoming.refract(Vec3(0, 1, 0), eta)
        assert abs(refracted.x - eta * incoming.x) < 1e-12


class TestVec3Utility:
    """Test Vec3 utility methods."""

    def test_near_zero(self):
        assert Vec3(1e-10, 1e-10, 1e-10).near_zero()
        assert Vec3(-1e-9, 0, 0).near_zero()
        assert not Vec3(1, 0, 0).near_zero()
        assert not Vec3(0, 0, 1e-7).near_zero()

    def test_clamp(self):
        clamped = Vec3(-0.5, 0.5, 1.5).clamp(0, 1)
        assert clamped.components() == (0.0, 0.5, 1.0)

    def test_to_rgb_bytes_floors(self):
        assert Color(0.5, 1.2, -0.1).to_rgb_bytes() == (127, 255, 0)
        assert Color(1.0, 0.999, 0.0).to_rgb_bytes() == (255, 254, 0)

    def test_to_array(self):
        arr = Vec3(1, 2, 3).to_array()
        assert isinstance(arr, np.ndarray)
        assert list(arr) == [1.0, 2.0, 3.0]


class TestVec3Random:
    """Test Vec3 random generation."""

    def test_random(self, rng):
        v = Vec3.random(rng)
        assert 0 <= v.x <= 1
        assert 0 <= v.y <= 1
        assert 0 <= v.z <= 1

    def test_random_range(self, rng):
        for _ in range(100):
            v = Vec3.random(rng, 0.5, 1.0)
            assert all(0.5 <= c <= 1.0 for c in v)

    def test_random_in_unit_sphere(self, rng):
        for _ in range(1000):
            v = Vec3.random_in_unit_sphere(rng)
            assert v.length_squared() <= 1

    def test_random_unit_vector(self, rng):
        for _ in range(200):
            v = Vec3.random_unit_vector(rng)
            assert abs(v.length() - 1.0) < 1e-10

    def test_random_in_unit_disk(self, rng):
        for _ in range(1000):
            v = Vec3.random_in_unit_disk(rng)
            assert v.z == 0
            assert v.length_squared() < 1

    def test_seeded_streams_repeat(self):
        a = Vec3.random_in_unit_sphere(np.random.default_rng(7))
        b = Vec3.random_in_unit_sphere(np.random.default_rng(7))
        assert a.components() == b.components()


class TestVec3Comparison:
    """Test Vec3 comparison operations."""

    def test_equality(self):
        assert Vec3(1, 2, 3) == Vec3(1, 2, 3)

    def test_inequality(self):
        assert Vec3(1, 2, 3) != Vec3(1, 2, 4)

    def test_approximate_equality(self):
        assert Vec3(1, 2, 3) == Vec3(1 + 1e-12, 2, 3)  # Should be equal due to allclose

    def test_unhashable(self):
        # Approximate equality has no consistent hash
        with pytest.raises(TypeError):
            hash(Vec3(1, 2, 3))


class TestVec3Indexing:
    """Test Vec3 indexing."""

    def test_getitem(self):
        v = Vec3(1, 2, 3)
        assert v[0] == 1
        assert v[1] == 2
        assert v[2] == 3
