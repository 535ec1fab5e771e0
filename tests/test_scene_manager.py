"""Unit tests for the SceneManager builder and scene presets."""

import pytest


class TestSceneManagerBuilding:
    """Tests for adding spheres through the SceneManager."""

    def test_new_manager_starts_empty(self):
        from spheretracer.materials import lambertian
        from spheretracer.scene.intersection import add_sphere
        from spheretracer.scene.manager import SceneManager

        add_sphere((0.0, 0.0, -1.0), 0.5, lambertian((0.5, 0.5, 0.5)))
        scene = SceneManager()

        assert scene.get_sphere_count() == 0
        assert scene.spheres == []

    def test_add_each_material_kind(self):
        from spheretracer.materials import MaterialKind
        from spheretracer.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_lambertian_sphere((0, -100.5, -1), 100, (0.8, 0.8, 0.0))
        scene.add_metal_sphere((1, 0, -1), 0.5, (0.8, 0.6, 0.2))
        scene.add_fuzzy_metal_sphere((-1, 0, -1), 0.5, (0.8, 0.8, 0.8), fuzz=0.3)
        scene.add_dielectric_sphere((0, 0, -1), 0.5, refractive_index=1.5)

        assert scene.get_sphere_count() == 4
        kinds = [info.material.kind for info in scene.spheres]
        assert kinds == [
            MaterialKind.LAMBERTIAN,
            MaterialKind.METAL,
            MaterialKind.FUZZY_METAL,
            MaterialKind.DIELECTRIC,
        ]

    def test_sphere_info(self):
        from spheretracer.scene.manager import SceneManager

        scene = SceneManager()
        index = scene.add_fuzzy_metal_sphere((1, 2, 3), 0.25, (0.1, 0.2, 0.3), fuzz=0.5)
        info = scene.get_sphere_info(index)

        assert info is not None
        assert info.center == (1.0, 2.0, 3.0)
        assert info.radius == 0.25
        assert info.material.fuzz == 0.5
        assert scene.get_sphere_info(7) is None

    def test_clear(self):
        from spheretracer.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_metal_sphere((0, 0, -1), 0.5, (0.5, 0.5, 0.5))
        scene.clear()

        assert scene.get_sphere_count() == 0
        assert scene.spheres == []

    def test_invalid_parameters_raise(self):
        from spheretracer.scene.manager import SceneManager

        scene = SceneManager()
        with pytest.raises(ValueError):
            scene.add_lambertian_sphere((0, 0, -1), 0.5, (1.2, 0.5, 0.5))
        with pytest.raises(ValueError):
            scene.add_fuzzy_metal_sphere((0, 0, -1), 0.5, (0.5, 0.5, 0.5), fuzz=1.5)
        with pytest.raises(ValueError):
            scene.add_dielectric_sphere((0, 0, -1), 0.5, refractive_index=0.0)
        with pytest.raises(ValueError):
            scene.add_metal_sphere((0, 0, -1), -0.5, (0.5, 0.5, 0.5))

        assert scene.get_sphere_count() == 0


class TestSceneSerialization:
    """Tests for to_dict() and from_dict()."""

    def test_dict_layout(self):
        from spheretracer.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_dielectric_sphere((0, 0, -1), 0.5, refractive_index=1.5)
        scene.add_fuzzy_metal_sphere((1, 0, -1), 0.5, (0.8, 0.6, 0.2), fuzz=0.3)

        data = scene.to_dict()

        assert data["spheres"][0] == {
            "center": [0.0, 0.0, -1.0],
            "radius": 0.5,
            "material": {"type": "dielectric", "refractive_index": 1.5},
        }
        assert data["spheres"][1]["material"] == {
            "type": "fuzzy_metal",
            "albedo": [0.8, 0.6, 0.2],
            "fuzz": 0.3,
        }

    def test_from_dict_rebuilds_scene(self):
        from spheretracer.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_lambertian_sphere((0, -100.5, -1), 100, (0.8, 0.8, 0.0))
        scene.add_metal_sphere((1, 0, -1), 0.5, (0.8, 0.6, 0.2))
        data = scene.to_dict()

        other = SceneManager()
        other.from_dict(data)

        assert other.get_sphere_count() == 2
        assert other.to_dict() == data

    def test_unknown_material_type_raises(self):
        from spheretracer.scene.manager import SceneManager

        scene = SceneManager()
        data = {
            "spheres": [
                {"center": [0, 0, -1], "radius": 0.5, "material": {"type": "plastic"}}
            ]
        }
        with pytest.raises(ValueError):
            scene.from_dict(data)

    def test_missing_keys_raise(self):
        from spheretracer.scene.manager import SceneManager

        scene = SceneManager()
        with pytest.raises(ValueError):
            scene.from_dict({"spheres": [{"center": [0, 0, -1], "radius": 0.5}]})
        with pytest.raises(ValueError):
            scene.from_dict(
                {
                    "spheres": [
                        {"center": [0, 0, -1], "radius": 0.5, "material": {"type": "metal"}}
                    ]
                }
            )
        with pytest.raises(ValueError):
            scene.from_dict(
                {
                    "spheres": [
                        {
                            "center": [0, -1],
                            "radius": 0.5,
                            "material": {"type": "metal", "albedo": [0.5, 0.5, 0.5]},
                        }
                    ]
                }
            )


class TestScenePresets:
    """Tests for the named scene presets."""

    def test_default_scene(self):
        from spheretracer.materials import MaterialKind
        from spheretracer.scene.presets import create_scene

        scene = create_scene("default")

        assert scene.get_sphere_count() == 4
        ground = scene.spheres[0]
        assert ground.center == (0.0, -100.5, -1.0)
        assert ground.radius == 100.0
        assert ground.material.albedo == (0.8, 0.8, 0.0)
        kinds = [info.material.kind for info in scene.spheres]
        assert kinds.count(MaterialKind.METAL) == 2
        assert kinds.count(MaterialKind.LAMBERTIAN) == 2

    def test_showcase_uses_every_material_kind(self):
        from spheretracer.materials import MaterialKind
        from spheretracer.scene.presets import create_scene

        scene = create_scene("showcase")

        kinds = {info.material.kind for info in scene.spheres}
        assert kinds == set(MaterialKind)

    def test_presets_replace_previous_scene(self):
        from spheretracer.scene.presets import create_scene

        create_scene("showcase")
        scene = create_scene("default")

        assert scene.get_sphere_count() == 4

    def test_unknown_preset_raises(self):
        from spheretracer.scene.presets import create_scene

        with pytest.raises(ValueError, match="Unknown scene preset"):
            create_scene("cornell")
