"""Unit tests for the Dielectric material.

Tests cover:
- Refraction ratio for entering and leaving rays
- Total internal reflection
- Index 1.0 leaves refracted rays undeviated
- Attenuation is always white
- Constructor validation
"""

import math

import pytest
import taichi as ti


def _scatter_many(n_samples, refractive_index, incident, normal, front_face):
    from spheretracer.materials.dielectric import scatter_dielectric

    directions = ti.Vector.field(3, dtype=ti.f32, shape=n_samples)
    attenuations = ti.Vector.field(3, dtype=ti.f32, shape=n_samples)
    scattered = ti.field(dtype=ti.i32, shape=n_samples)

    ix, iy, iz = (float(c) for c in incident)
    nx, ny, nz = (float(c) for c in normal)

    @ti.kernel
    def test_kernel():
        ti.loop_config(serialize=True)
        for k in range(n_samples):
            direction, attenuation, did_scatter = scatter_dielectric(
                refractive_index,
                ti.math.vec3(ix, iy, iz),
                ti.math.vec3(nx, ny, nz),
                front_face,
                0,
            )
            directions[k] = direction
            attenuations[k] = attenuation
            scattered[k] = did_scatter

    test_kernel()
    return directions.to_numpy(), attenuations.to_numpy(), scattered.to_numpy()


class TestRefractionRatio:
    """Tests for refraction_ratio() and cannot_refract()."""

    def test_ratio_entering_and_leaving(self):
        from spheretracer.materials.dielectric import refraction_ratio

        results = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            results[0] = refraction_ratio(1.5, 1)
            results[1] = refraction_ratio(1.5, 0)

        test_kernel()
        assert abs(results[0] - 1.0 / 1.5) < 1e-6
        assert abs(results[1] - 1.5) < 1e-6

    def test_cannot_refract(self):
        from spheretracer.materials.dielectric import cannot_refract

        results = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            normal = ti.math.vec3(0.0, 1.0, 0.0)
            steep = ti.math.normalize(ti.math.vec3(1.0, -0.2, 0.0))
            results[0] = cannot_refract(steep, normal, 1.5)
            results[1] = cannot_refract(steep, normal, 1.0 / 1.5)

        test_kernel()
        assert results[0] == 1
        assert results[1] == 0


class TestDielectricScatter:
    """Tests for scatter_dielectric()."""

    def test_always_scatters_with_white_attenuation(self):
        _, attenuations, scattered = _scatter_many(
            200, 1.5, (0.5, -1.0, 0.0), (0.0, 1.0, 0.0), 1
        )

        assert (scattered == 1).all()
        assert abs(attenuations - 1.0).max() < 1e-6

    def test_total_internal_reflection(self):
        """Test that a steep ray leaving glass is always reflected."""
        incident = (1.0, -0.2, 0.0)
        directions, _, _ = _scatter_many(200, 1.5, incident, (0.0, 1.0, 0.0), 0)

        length = math.sqrt(1.0 + 0.04)
        expected = (1.0 / length, 0.2 / length, 0.0)
        assert abs(directions - expected).max() < 1e-5

    def test_unit_index_normal_incidence_passes_straight(self):
        directions, _, _ = _scatter_many(100, 1.0, (0.0, 0.0, -1.0), (0.0, 0.0, 1.0), 1)

        assert abs(directions - (0.0, 0.0, -1.0)).max() < 1e-5

    def test_unit_index_refraction_is_undeviated(self):
        """Test that every refracted ray keeps its direction when the index is 1."""
        incident = (1.0, -0.3, 0.0)
        directions, _, _ = _scatter_many(500, 1.0, incident, (0.0, 1.0, 0.0), 1)

        length = math.sqrt(1.0 + 0.09)
        straight = (incident[0] / length, incident[1] / length, 0.0)
        mirrored = (incident[0] / length, -incident[1] / length, 0.0)
        for d in directions:
            is_straight = abs(d - straight).max() < 1e-5
            is_mirrored = abs(d - mirrored).max() < 1e-5
            assert is_straight or is_mirrored
        refracted = [d for d in directions if d[1] < 0.0]
        assert refracted

    def test_glass_sometimes_reflects_at_grazing_angles(self):
        """Test that Schlick reflectance makes grazing rays reflect part of the time."""
        directions, _, _ = _scatter_many(500, 1.5, (1.0, -0.1, 0.0), (0.0, 1.0, 0.0), 1)

        ys = directions[:, 1]
        assert (ys > 0.0).any()
        assert (ys < 0.0).any()


class TestDielectricConstructor:
    """Tests for dielectric()."""

    def test_default_is_glass(self):
        from spheretracer.materials import MaterialKind, dielectric

        material = dielectric()

        assert material.kind == MaterialKind.DIELECTRIC
        assert material.refractive_index == 1.5

    @pytest.mark.parametrize("refractive_index", [0.0, -1.5])
    def test_non_positive_index_raises(self, refractive_index):
        from spheretracer.materials import dielectric

        with pytest.raises(ValueError):
            dielectric(refractive_index)
