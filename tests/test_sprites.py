import logging

import pytest
from PIL import Image

from odyc_cli.sprites import (
    ColorInfo,
    SpriteConfig,
    SpriteError,
    build_config,
    color_symbol,
    generate,
    list_pngs,
    logger,
    pixel_hex,
)

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
CLEAR = (0, 0, 0, 0)

EXPECTED_JS = (
    "var gameConfig = {\n"
    "\tcellWidth: 3,\n"
    "\tcellHeight: 2,\n"
    "\tcolors: [\n"
    '\t\t"#ff0000ff",\n'
    '\t\t"#00ff00ff",\n'
    '\t\t"#0000ffff",\n'
    "\t],\n"
    "\tsprites: {\n"
    '\t\t"alpha": `\n'
    "\t\t\t01\n"
    "\t\t\t.0\n"
    "\t\t`,\n"
    '\t\t"beta": `\n'
    "\t\t\t202\n"
    "\t\t`,\n"
    "\t}\n"
    "};"
)


def _write_png(path, rows, mode="RGBA"):
    image = Image.new(mode, (len(rows[0]), len(rows)))
    for y, row in enumerate(rows):
        for x, pixel in enumerate(row):
            image.putpixel((x, y), pixel)
    image.save(path)


@pytest.fixture
def assets(tmp_path):
    directory = tmp_path / "assets"
    directory.mkdir()
    _write_png(directory / "alpha.png", [[RED, GREEN], [CLEAR, RED]])
    _write_png(directory / "beta.png", [[BLUE, RED, BLUE]])
    return directory


@pytest.mark.parametrize(
    "index, symbol",
    [(0, "0"), (9, "9"), (10, "a"), (35, "z"), (36, "A"), (61, "Z")],
)
def test_color_symbol(index, symbol):
    assert color_symbol(index) == symbol


def test_color_symbol_too_many():
    with pytest.raises(SpriteError, match="Too many colors"):
        color_symbol(62)


def test_pixel_hex_opaque():
    assert pixel_hex((255, 0, 16, 255)) == "#ff0010ff"


def test_pixel_hex_fully_transparent_is_zero():
    assert pixel_hex((10, 20, 30, 0)) == "#00000000"


def test_pixel_hex_premultiplied():
    assert pixel_hex((255, 255, 255, 128)) == "#80808080"


def test_list_pngs(assets):
    (assets / "notes.txt").write_text("x")
    (assets / "sub").mkdir()
    (assets / "aaa.png").write_bytes(b"")
    assert list_pngs(assets) == ["aaa.png", "alpha.png", "beta.png"]


def test_list_pngs_missing_directory(tmp_path):
    with pytest.raises(SpriteError, match="Error reading assets directory"):
        list_pngs(tmp_path / "missing")


def test_build_config(assets):
    config = build_config(assets)
    assert config.cell_width == 3
    assert config.cell_height == 2
    assert config.palette == ["#ff0000ff", "#00ff00ff", "#0000ffff"]
    assert config.sprites == {"alpha": ["01", ".0"], "beta": ["202"]}
    red = config.colors["#ff0000ff"]
    assert (red.index, red.count, red.files) == (0, 3, ["alpha.png", "beta.png"])
    blue = config.colors["#0000ffff"]
    assert (blue.count, blue.files) == (2, ["beta.png"])


def test_build_config_warns_about_width(assets, caplog, monkeypatch):
    monkeypatch.setattr(logger, "propagate", True)
    monkeypatch.setattr(logger, "handlers", [])
    with caplog.at_level(logging.DEBUG, logger="odyc_cli"):
        build_config(assets)
    messages = [record.getMessage() for record in caplog.records]
    assert any("different widths" in m for m in messages)
    assert not any("different heights" in m for m in messages)
    assert "3 colors found across all sprites" in messages


def test_build_config_grayscale(tmp_path):
    _write_png(tmp_path / "g.png", [[255, 0]], mode="L")
    config = build_config(tmp_path)
    assert config.palette == ["#ffffffff", "#000000ff"]
    assert config.sprites == {"g": ["01"]}


def test_build_config_no_pngs(tmp_path):
    (tmp_path / "readme.txt").write_text("x")
    with pytest.raises(SpriteError, match="No PNG files found"):
        build_config(tmp_path)


def test_build_config_bad_png(tmp_path):
    (tmp_path / "broken.png").write_text("not an image")
    with pytest.raises(SpriteError, match="Error decoding image"):
        build_config(tmp_path)


def test_build_config_only_transparent(tmp_path):
    _write_png(tmp_path / "empty.png", [[CLEAR, CLEAR]])
    with pytest.raises(SpriteError, match="No colors found"):
        build_config(tmp_path)


def test_build_config_sixty_two_colors(tmp_path):
    _write_png(tmp_path / "many.png", [[(i, 0, 0, 255) for i in range(62)]])
    config = build_config(tmp_path)
    assert config.sprites["many"][0][-1] == "Z"
    assert len(config.colors) == 62


def test_build_config_too_many_colors(tmp_path):
    _write_png(tmp_path / "many.png", [[(i, 0, 0, 255) for i in range(63)]])
    with pytest.raises(SpriteError, match="Too many colors"):
        build_config(tmp_path)


def test_render(assets):
    assert build_config(assets).render() == EXPECTED_JS


def test_render_constructed_config():
    config = SpriteConfig(
        cell_width=1,
        cell_height=1,
        colors={"#112233ff": ColorInfo(color="#112233ff", index=0, count=1, files=["x.png"])},
        sprites={"x": ["0"]},
    )
    assert config.render() == (
        "var gameConfig = {\n\tcellWidth: 1,\n\tcellHeight: 1,\n\tcolors: [\n"
        '\t\t"#112233ff",\n\t],\n\tsprites: {\n\t\t"x": `\n\t\t\t0\n\t\t`,\n\t}\n};'
    )


def test_color_info_add_counts_files_once():
    info = ColorInfo(color="#000000ff", index=0)
    info.add("a.png")
    info.add("a.png")
    info.add("b.png")
    assert info.count == 3
    assert info.files == ["a.png", "b.png"]


def test_generate_writes_file(assets, tmp_path):
    output = tmp_path / "sprites.js"
    config = generate(assets, output, False)
    assert config.sprites["beta"] == ["202"]
    assert output.read_text(encoding="utf-8") == EXPECTED_JS


def test_generate_existing_output_without_force(assets, tmp_path):
    output = tmp_path / "sprites.js"
    output.write_text("keep")
    assert generate(assets, output, False) is None
    assert output.read_text() == "keep"


def test_generate_existing_output_with_force(assets, tmp_path):
    output = tmp_path / "sprites.js"
    output.write_text("keep")
    generate(assets, output, True)
    assert output.read_text(encoding="utf-8") == EXPECTED_JS


def test_generate_missing_output_directory(assets, tmp_path):
    with pytest.raises(SpriteError, match="Directory of output path does not exist"):
        generate(assets, tmp_path / "nope" / "sprites.js", False)


def test_generate_missing_assets(tmp_path):
    with pytest.raises(SpriteError, match="Assets directory does not exist"):
        generate(tmp_path / "missing", tmp_path / "sprites.js", False)