"""CLI entrypoints for color sampling, color conversion and overlay state inspection."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from typing import Any

from textoverlay_color import ImageLoadError, UrlImageLoader, get_line_colors_sync, set_alpha, to_hex
from textoverlay_core import configure_logging, load_config
from textoverlay_state import get_texts_for_visible_canvases, get_window_text_overlay_options


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _json_arg(value: str) -> Any:
    try:
        return json.loads(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid JSON: {exc}") from exc


def cmd_line_colors(args: argparse.Namespace) -> int:
    cfg = load_config()
    loader = UrlImageLoader(timeout_s=cfg.sampler.timeout_s, user_agent=cfg.sampler.user_agent)
    width = args.width or cfg.sampler.rendition_width

    try:
        colors = get_line_colors_sync(args.service, loader=loader, width=width)
    except ImageLoadError as exc:
        _print_json({"success": False, "service": args.service, "error": str(exc)})
        return 2

    payload = asdict(colors)
    payload.update(
        {
            "success": True,
            "service": args.service,
            "text_color_hex": to_hex(colors.text_color),
            "bg_color_hex": to_hex(colors.bg_color),
        }
    )
    _print_json(payload)
    return 0


def cmd_set_alpha(args: argparse.Namespace) -> int:
    _print_json({"input": args.color, "opacity": args.opacity, "color": set_alpha(args.color, args.opacity)})
    return 0


def cmd_to_hex(args: argparse.Namespace) -> int:
    _print_json({"input": args.color, "color": to_hex(args.color)})
    return 0


def cmd_options(args: argparse.Namespace) -> int:
    options = get_window_text_overlay_options(args.window_config)
    _print_json(options.to_dict())
    return 0


def cmd_visible_texts(args: argparse.Namespace) -> int:
    _print_json(get_texts_for_visible_canvases(args.canvases, args.texts))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="textoverlay", description="Text overlay color and state tools")
    sub = parser.add_subparsers(dest="command", required=True)

    colors_cmd = sub.add_parser("line-colors", help="Detect text and background color of an image service")
    colors_cmd.add_argument("service", help="IIIF image service base URL")
    colors_cmd.add_argument("--width", type=int, default=None, help="Rendition width in pixels")
    colors_cmd.set_defaults(func=cmd_line_colors)

    alpha_cmd = sub.add_parser("set-alpha", help="Apply an opacity to a color literal")
    alpha_cmd.add_argument("color")
    alpha_cmd.add_argument("opacity", type=float)
    alpha_cmd.set_defaults(func=cmd_set_alpha)

    hex_cmd = sub.add_parser("to-hex", help="Convert rgb()/rgba() to hex")
    hex_cmd.add_argument("color")
    hex_cmd.set_defaults(func=cmd_to_hex)

    options_cmd = sub.add_parser("options", help="Print effective text overlay options for a window config")
    options_cmd.add_argument("--window-config", type=_json_arg, default=None, help="Window config as JSON")
    options_cmd.set_defaults(func=cmd_options)

    texts_cmd = sub.add_parser("visible-texts", help="Print text records for visible canvases")
    texts_cmd.add_argument("--canvases", type=_json_arg, default=None, help="Visible canvas ids as JSON list")
    texts_cmd.add_argument("--texts", type=_json_arg, default=None, help="Texts by canvas id as JSON object")
    texts_cmd.set_defaults(func=cmd_visible_texts)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(cfg, console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
