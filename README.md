# odyc-cli

Command-line helpers for Odyc.js developers.

The `sprites` command reads a directory of PNG sprites and writes a JavaScript
file that defines a `gameConfig` object. That object holds the cell size, the
colour palette and every sprite drawn with palette symbols.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Usage

Run the command with no arguments to see a welcome message:

```
odyc-cli
```

List the available commands:

```
odyc-cli --help
```

The same entry point can also be started with `python -m odyc_cli.cli`.

### Generating sprites

```
odyc-cli sprites --assets path/to/assets --output path/to/sprites.js
```

Options:

- `-a`, `--assets`: the directory that holds the `.png` files. Required.
- `-o`, `--output`: the JavaScript file to write. Required. Its directory must already exist.
- `-f`, `--force`: overwrite the output file if it already exists.

If `--assets` or `--output` is missing, the command prints
`Error: required flag(s) ... not set` with a usage line and exits with status 1.

Every file whose name ends in `.png` becomes one sprite, named after the file
without that extension. Files are read in name order. Other files are skipped
with a message, and subdirectories get a warning.

Pixels are read as RGBA and written as `#rrggbbaa`, with the colour channels
premultiplied by alpha. A pixel that comes out as `#00000000` (fully
transparent) is written as `.`. Each other distinct colour gets the next free
palette symbol in the order it is first seen: `0`–`9`, then `a`–`z`, then
`A`–`Z`. That allows up to 62 colours; one more is an error.

`cellWidth` and `cellHeight` are the largest width and height among the
images. The command warns once if the widths differ and once if the heights
differ. Each sprite keeps its own size.

If the output file already exists and `--force` is not given, the command
prints a warning, leaves the file unchanged and exits with status 0.

Any other failure (missing assets directory, no PNG files, an image that
cannot be decoded, no colours at all, too many colours, a file that cannot be
written) is logged as an error and the command exits with status 1.

Log lines go to standard error with a level label (`DEBUG`, `INFO`,
`SUCCESS`, `WARN`, `ERROR!`). The labels are coloured when standard error is
a terminal. The debug lines list every colour with how often it occurs.

### Example output

For two 2×2 sprites, `a.png` and `b.png`:

```js
var gameConfig = {
	cellWidth: 2,
	cellHeight: 2,
	colors: [
		"#000000ff",
		"#ffffffff",
	],
	sprites: {
		"a": `
			01
			.0
		`,
		"b": `
			11
			1.
		`,
	}
};
```

## Using it from Python

```python
from odyc_cli.sprites import SpriteError, build_config, generate

config = build_config("assets")        # SpriteConfig
print(config.palette)                   # colour codes in palette order
print(config.sprites["player"])         # list of row strings
print(config.render())                  # JavaScript source

try:
    generate("assets", "build/sprites.js", force=True)
except SpriteError as exc:
    print(exc)
```

`generate` returns the `SpriteConfig` it wrote, or `None` when the output file
exists and `force` is false. Problems are raised as `SpriteError`.

Other helpers in `odyc_cli.sprites`:

- `list_pngs(assets_dir)`: names of the PNG files in a directory, sorted.
- `pixel_hex(rgba)`: the `#rrggbbaa` code for an 8-bit RGBA tuple.
- `color_symbol(index)`: the palette symbol for an index from 0 to 61.

Messages are sent to the `odyc_cli` logger; `odyc_cli.cli.configure_logging`
attaches a labelled handler for a given stream.