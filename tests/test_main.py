import pytest
from PIL import Image

from pathtracer.main import main
from pathtracer.scenes import SCENES, build_scene


@pytest.mark.parametrize("name", sorted(SCENES))
def test_scenes_build(name):
    scene = build_scene(name, seed=1)
    assert len(scene.world) > 0
    scene.camera.validate()


def test_unknown_scene():
    with pytest.raises(KeyError):
        build_scene("nope")


def test_cli_renders_image(tmp_path):
    out = tmp_path / "render.png"
    code = main(["--scene", "single", "--width", "6", "--height", "4", "--samples", "1",
                 "--max-depth", "2", "--seed", "3", "--workers", "2", "--no-progress",
                 "--output", str(out)])
    assert code == 0
    with Image.open(out) as img:
        assert img.size == (6, 4)


def test_cli_is_deterministic_with_seed(tmp_path):
    paths = [tmp_path / "a.png", tmp_path / "b.png"]
    for workers, path in zip(("1", "3"), paths):
        assert main(["--scene", "materials", "--width", "5", "--height", "4", "--samples", "2",
                     "--max-depth", "3", "--seed", "11", "--workers", workers,
                     "--no-progress", "--output", str(path)]) == 0
    with Image.open(paths[0]) as a, Image.open(paths[1]) as b:
        assert list(a.getdata()) == list(b.getdata())


def test_cli_reports_config_errors():
    assert main(["--width", "0", "--no-progress"]) == 1
