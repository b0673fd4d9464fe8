from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from sublayer_builder.export import render_json
from sublayer_builder.karabiner.hyper_key import generate_hyper_key_rule
from sublayer_builder.karabiner.importer import InvalidRuleError, parse_sublayer_rule
from sublayer_builder.karabiner.sublayer import generate_sublayer_rule
from sublayer_builder.settings import Settings, get_settings
from sublayer_builder.sublayer.frontend import SublayerFrontend
from sublayer_builder.sublayer.hyper_editor import HYPER_KEYS, MODIFIER_KEYS, apply_modifier_selection
from sublayer_builder.sublayer.model import HyperKeyConfig

logger = logging.getLogger(__name__)


def compile_toml_config(in_path: str | Path, out_path: str | Path, *, indent: int | None = 2) -> None:
    """End-to-end compilation: sublayer TOML file -> Karabiner rule JSON file."""

    in_path = Path(in_path)
    out_path = Path(out_path)

    frontend = SublayerFrontend()
    config = frontend.parse_config(frontend.load_toml(in_path))
    if not config.sublayer_char:
        logger.warning("%s has an empty sublayer character", in_path)
    for action in config.actions:
        if not action.key_code:
            logger.warning("action %r in %s has no key", action.description, in_path)

    rule = generate_sublayer_rule(config)
    out_path.write_text(render_json(rule, indent=indent) + "\n", encoding="utf-8")
    logger.info("wrote %d manipulators to %s", len(rule.manipulators), out_path)


def _cmd_generate(args: argparse.Namespace, settings: Settings) -> int:
    compile_toml_config(args.config, args.out, indent=args.indent)
    return 0


def _cmd_parse(args: argparse.Namespace, settings: Settings) -> int:
    text = Path(args.rule).read_text(encoding="utf-8")
    config = parse_sublayer_rule(text)
    dumped = config.model_dump_json(indent=2)
    if args.out:
        Path(args.out).write_text(dumped + "\n", encoding="utf-8")
    else:
        sys.stdout.write(dumped + "\n")
    return 0


def _cmd_hyper(args: argparse.Namespace, settings: Settings) -> int:
    modifiers = apply_modifier_selection([], args.modifier, args.key)
    config = HyperKeyConfig(
        description=args.description,
        hyper_key=args.key,
        variable=args.variable,
        modifiers=modifiers,
        alone_key_code=args.alone,
    )
    rule = generate_hyper_key_rule(config)
    Path(args.out).write_text(render_json(rule, indent=args.indent) + "\n", encoding="utf-8")
    logger.info("wrote hyper key rule to %s", args.out)
    return 0


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    from sublayer_builder.ui.app import launch

    update = {}
    if args.host:
        update["server_name"] = args.host
    if args.port:
        update["server_port"] = args.port
    launch(settings.model_copy(update=update))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sublayer-builder",
        description="Build Karabiner Elements Hyper key sublayer rules.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: from settings, INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a sublayer rule json from a toml definition")
    gen.add_argument("config", help="Sublayer toml path (e.g. sublayer_o.toml)")
    gen.add_argument("out", help="Output Karabiner rule json path")
    gen.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    gen.set_defaults(func=_cmd_generate)

    parse = sub.add_parser("parse", help="Read a sublayer rule json back into an editable config")
    parse.add_argument("rule", help="Karabiner rule json path")
    parse.add_argument("--out", help="Write the config json here instead of stdout")
    parse.set_defaults(func=_cmd_parse)

    hyper = sub.add_parser("hyper", help="Generate the Hyper key rule json")
    hyper.add_argument("out", help="Output Karabiner rule json path")
    hyper.add_argument("--key", required=True, choices=HYPER_KEYS, help="Key to use as Hyper key")
    hyper.add_argument("--description", required=True, help="Rule description")
    hyper.add_argument("--variable", default="hyper", help="Variable set while held (default: hyper)")
    hyper.add_argument(
        "--modifier",
        action="append",
        default=[],
        choices=MODIFIER_KEYS,
        help="Modifier to send while held (repeatable)",
    )
    hyper.add_argument("--alone", default="", help="Key code sent when the key is tapped alone")
    hyper.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    hyper.set_defaults(func=_cmd_hyper)

    serve = sub.add_parser("serve", help="Run the browser form editor")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Port")
    serve.set_defaults(func=_cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args, settings)
    except InvalidRuleError as exc:
        logger.error("invalid rule: %s", exc)
    except ValidationError as exc:
        logger.error("invalid config: %s", exc)
    except ValueError as exc:
        logger.error("%s", exc)
    except OSError as exc:
        logger.error("%s", exc)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
