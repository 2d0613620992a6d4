#!/usr/bin/env python3
"""
Render the geometry recovered from an MPR file to PNG previews.

The script reuses the converter's parser so the picture matches the DXF
output (Z is dropped, the line runs from the XY origin), then rasterizes the
result with Pillow.  Example:

    python render_mpr_png.py PART.mpr \
        --preview PART_thumb.png --preview-size 256 \
        --hires PART_full.png --hires-size 2048
"""

from __future__ import annotations

import argparse
import math
from pathlib import Path
from typing import Sequence, Tuple

from PIL import Image, ImageDraw

from mprcad.convert import decode_document
from mprcad.entities import CircleDescriptor, ConversionResult, LineDescriptor
from mprcad.parser import parse_document


def load_geometry(path: Path) -> ConversionResult:
    return parse_document(decode_document(path.read_bytes()))


def _sample_circle_points(circle: CircleDescriptor, segments: int = 128) -> list[Tuple[float, float]]:
    if circle.radius <= 0:
        return []
    points: list[Tuple[float, float]] = []
    for step in range(segments):
        angle = 2 * math.pi * step / segments
        points.append(
            (
                circle.xa + circle.radius * math.cos(angle),
                circle.ya + circle.radius * math.sin(angle),
            )
        )
    return points


def _collect_bounds(
    line: LineDescriptor,
    circles: Sequence[CircleDescriptor],
) -> Tuple[float, float, float, float]:
    points: list[Tuple[float, float]] = [(0.0, 0.0), (line.x, line.y)]
    for circle in circles:
        points.extend(_sample_circle_points(circle))
        points.append(circle.center)
    xs = [pt[0] for pt in points]
    ys = [pt[1] for pt in points]
    return min(xs), max(xs), min(ys), max(ys)


def _build_transform(
    bounds: Tuple[float, float, float, float],
    size_px: int,
    padding_ratio: float,
):
    min_x, max_x, min_y, max_y = bounds
    width = max(max_x - min_x, 1e-9)
    height = max(max_y - min_y, 1e-9)
    pad = max(width, height) * padding_ratio

    world_min_x = min_x - pad
    world_max_x = max_x + pad
    world_min_y = min_y - pad
    world_max_y = max_y + pad

    world_width = world_max_x - world_min_x
    world_height = world_max_y - world_min_y

    scale = min(size_px / world_width, size_px / world_height)
    offset_x = (size_px - world_width * scale) / 2.0
    offset_y = (size_px - world_height * scale) / 2.0

    def transform(point: Tuple[float, float]) -> Tuple[float, float]:
        x, y = point
        px = (x - world_min_x) * scale + offset_x
        py = size_px - ((y - world_min_y) * scale + offset_y)
        return px, py

    return transform, scale


def render_png(
    result: ConversionResult,
    destination: Path,
    size_px: int,
    *,
    padding_ratio: float = 0.05,
) -> None:
    if size_px <= 0:
        raise ValueError("size_px must be positive")
    bounds = _collect_bounds(result.line, result.circles)
    transform, scale = _build_transform(bounds, size_px, padding_ratio)

    image = Image.new("RGBA", (size_px, size_px), (255, 255, 255, 0))
    draw = ImageDraw.Draw(image)
    stroke = max(1, int(size_px / 256))

    start = transform((0.0, 0.0))
    end = transform((result.line.x, result.line.y))
    draw.line([start, end], fill="black", width=stroke)

    for circle in result.circles:
        if circle.radius <= 0:
            continue
        center_px = transform(circle.center)
        radius_px = circle.radius * scale
        bbox = [
            center_px[0] - radius_px,
            center_px[1] - radius_px,
            center_px[0] + radius_px,
            center_px[1] + radius_px,
        ]
        draw.ellipse(bbox, outline="black", width=stroke)

    destination.parent.mkdir(parents=True, exist_ok=True)
    image.save(destination)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render MPR line/circle geometry to PNG.")
    parser.add_argument("input", type=Path, help="Source .mpr file")
    parser.add_argument("--preview", type=Path, help="Path for the low-res preview PNG")
    parser.add_argument("--preview-size", type=int, default=256, help="Preview size in pixels (square)")
    parser.add_argument("--hires", type=Path, help="Path for the high-res PNG")
    parser.add_argument("--hires-size", type=int, default=2048, help="High-res size in pixels (square)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if not args.preview and not args.hires:
        raise SystemExit("Specify --preview and/or --hires to render a PNG.")

    result = load_geometry(args.input)
    if args.preview:
        render_png(result, args.preview, args.preview_size)
        print(f"[+] Preview PNG written to {args.preview}")
    if args.hires:
        render_png(result, args.hires, args.hires_size)
        print(f"[+] High-res PNG written to {args.hires}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
