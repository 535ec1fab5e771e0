"""Unit tests for material dispatch through scatter()."""

import taichi as ti

vec3 = ti.math.vec3


def _scatter_once(kind, albedo=(0.5, 0.5, 0.5), fuzz=0.0, refractive_index=1.5):
    from spheretracer.core.ray import make_ray
    from spheretracer.geometry.sphere import HitRecord
    from spheretracer.materials.material import Material
    from spheretracer.materials.scatter import scatter

    origin = ti.Vector.field(3, dtype=ti.f32, shape=())
    direction = ti.Vector.field(3, dtype=ti.f32, shape=())
    attenuation = ti.Vector.field(3, dtype=ti.f32, shape=())
    did_scatter = ti.field(dtype=ti.i32, shape=())

    ar, ag, ab = (float(c) for c in albedo)

    @ti.kernel
    def test_kernel():
        incoming = make_ray(vec3(0.0, 1.0, 0.0), vec3(1.0, -1.0, 0.0))
        rec = HitRecord(
            hit=1,
            t=1.0,
            point=vec3(1.0, 0.0, 0.0),
            normal=vec3(0.0, 1.0, 0.0),
            front_face=1,
            material=Material(
                kind=kind, albedo=vec3(ar, ag, ab), fuzz=fuzz, refractive_index=refractive_index
            ),
        )
        out, att, scattered = scatter(incoming, rec, 0)
        origin[None] = out.origin
        direction[None] = out.direction
        attenuation[None] = att
        did_scatter[None] = scattered

    test_kernel()
    return origin[None], direction[None], attenuation[None], did_scatter[None]


class TestScatterDispatch:
    """Tests that scatter() routes each kind to its model."""

    def test_outgoing_ray_starts_at_hit_point(self):
        from spheretracer.materials import MaterialKind

        for kind in MaterialKind:
            origin, _, _, _ = _scatter_once(int(kind))
            assert abs(origin[0] - 1.0) < 1e-6
            assert abs(origin[1]) < 1e-6
            assert abs(origin[2]) < 1e-6

    def test_lambertian(self):
        from spheretracer.materials import MaterialKind

        _, direction, attenuation, did_scatter = _scatter_once(
            int(MaterialKind.LAMBERTIAN), albedo=(0.7, 0.3, 0.3)
        )

        assert did_scatter == 1
        assert direction[1] >= -1e-6
        assert abs(attenuation[0] - 0.7) < 1e-6

    def test_metal_mirrors(self):
        from spheretracer.materials import MaterialKind

        _, direction, attenuation, did_scatter = _scatter_once(
            int(MaterialKind.METAL), albedo=(0.8, 0.6, 0.2)
        )

        assert did_scatter == 1
        assert abs(direction[0] - direction[1]) < 1e-5
        assert direction[1] > 0.0
        assert abs(attenuation[1] - 0.6) < 1e-6

    def test_fuzzy_metal_with_zero_fuzz_mirrors(self):
        from spheretracer.materials import MaterialKind

        _, direction, _, did_scatter = _scatter_once(int(MaterialKind.FUZZY_METAL), fuzz=0.0)

        assert did_scatter == 1
        assert abs(direction[0] - direction[1]) < 1e-5

    def test_dielectric_is_white(self):
        from spheretracer.materials import MaterialKind

        _, _, attenuation, did_scatter = _scatter_once(
            int(MaterialKind.DIELECTRIC), albedo=(0.0, 0.0, 0.0)
        )

        assert did_scatter == 1
        assert abs(attenuation[0] - 1.0) < 1e-6
        assert abs(attenuation[2] - 1.0) < 1e-6
