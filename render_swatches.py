#!/usr/bin/env python3
"""
Render a theme as a PNG swatch sheet for eyeballing results.
"""

import sys

from PIL import Image, ImageDraw

from contrast import contrast_ratio
from oklch import hex_to_rgb
from theme_tokens import MODES, TOKEN_KEYS, DualTheme


SWATCH_SIZE = 80
PADDING = 10
TEXT_HEIGHT = 25
COLUMNS = 10


def label_color(hex_color: str) -> tuple:
    """Black or white, whichever reads better on the swatch."""
    return (0, 0, 0) if contrast_ratio('#000000', hex_color) >= contrast_ratio('#ffffff', hex_color) else (255, 255, 255)


def render_theme_swatches(theme: DualTheme, output_path: str) -> None:
    """
    Draw both sides of a theme as labeled swatch grids.

    Each side gets a header band in its own bg color followed by its twenty
    tokens, COLUMNS per row, with the token name and hex under each swatch.

    Args:
        theme: Theme to draw
        output_path: Path to save the PNG
    """
    rows_per_side = (len(TOKEN_KEYS) + COLUMNS - 1) // COLUMNS
    row_height = SWATCH_SIZE + TEXT_HEIGHT + PADDING
    header_height = 30
    side_height = header_height + rows_per_side * row_height + PADDING

    img_width = COLUMNS * (SWATCH_SIZE + PADDING) + PADDING
    img_height = len(MODES) * side_height

    img = Image.new('RGB', (img_width, img_height), (240, 240, 240))
    draw = ImageDraw.Draw(img)

    for side_index, mode in enumerate(MODES):
        tokens = theme.side(mode)
        top = side_index * side_height

        # Header band in the side's background
        bg = tokens['bg']
        draw.rectangle([0, top, img_width, top + side_height], fill=hex_to_rgb(bg))
        draw.text((PADDING, top + 8), f"{mode} ({theme.mode}, seed {theme.seed})", fill=hex_to_rgb(tokens['text']))

        for i, key in enumerate(TOKEN_KEYS):
            row = i // COLUMNS
            col = i % COLUMNS
            x = PADDING + col * (SWATCH_SIZE + PADDING)
            y = top + header_height + row * row_height

            hex_color = tokens[key]
            draw.rectangle([x, y, x + SWATCH_SIZE, y + SWATCH_SIZE], fill=hex_to_rgb(hex_color),
                           outline=hex_to_rgb(tokens['border']))
            draw.text((x + 4, y + SWATCH_SIZE - 14), hex_color, fill=label_color(hex_color))

            # Center the token name under the swatch
            bbox = draw.textbbox((0, 0), key)
            text_width = bbox[2] - bbox[0]
            text_x = x + (SWATCH_SIZE - text_width) // 2
            draw.text((text_x, y + SWATCH_SIZE + 4), key, fill=hex_to_rgb(tokens['textMuted']))

    img.save(output_path)
    print(f"Saved swatches to {output_path}", file=sys.stderr)
