from __future__ import annotations

import argparse
import json
import sys
import threading

from better_launcher.calc import evaluate_expression
from better_launcher.catalog import Catalog, build_catalog
from better_launcher.config import Config, ConfigError, load_config
from better_launcher.config_edit import get_value, known_keys, set_value, write_default_config
from better_launcher.launch import LaunchDispatcher
from better_launcher.logging_setup import setup_logging
from better_launcher.paths import find_config_path, get_paths
from better_launcher.session import LauncherSession


def _load(args: argparse.Namespace) -> Config:
    cfg = load_config(find_config_path(args.config))
    setup_logging(level=cfg.logging.level)
    return cfg


def _catalog(cfg: Config) -> Catalog:
    return build_catalog(cfg.catalog.search_roots(), extension=cfg.catalog.extension)


def _cmd_list(args: argparse.Namespace) -> int:
    cfg = _load(args)
    catalog = _catalog(cfg)
    if args.json:
        rows = [{"name": it.name, "exec": it.launch_command, "icon": it.icon_name} for it in catalog]
        print(json.dumps(rows, ensure_ascii=False, indent=2))
        return 0
    for it in catalog:
        print(f"{it.name}\t{it.launch_command}")
    return 0


def _cmd_query(args: argparse.Namespace) -> int:
    cfg = _load(args)
    session = LauncherSession(_catalog(cfg), LaunchDispatcher(), calc_enabled=cfg.query.calculator)
    state = session.on_query_changed(args.text)
    for i, (label, _icon) in enumerate(state.items):
        mark = ">" if i == state.selection else " "
        print(f"{mark} {label}")
    return 0 if state.items else 1


def _cmd_run(args: argparse.Namespace) -> int:
    cfg = _load(args)
    spawned: list[threading.Thread] = []

    def submit(job):
        t = threading.Thread(target=job, name="launcher-spawn")
        t.start()
        spawned.append(t)
        return t

    dispatcher = LaunchDispatcher(new_session=cfg.launch.new_session, submit=submit)
    session = LauncherSession(_catalog(cfg), dispatcher, calc_enabled=cfg.query.calculator)
    session.on_query_changed(args.text)
    action = session.on_commit()
    if action is None:
        print("no match", file=sys.stderr)
        return 1
    if action.kind == "copy":
        print(action.value)
    else:
        print(f"launching {action.label}")
    # the spawn itself must finish before the process exits
    for t in spawned:
        t.join(timeout=5.0)
    return 0


def _cmd_calc(args: argparse.Namespace) -> int:
    value = evaluate_expression(args.expr)
    if value is None:
        return 1
    print(value)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    dest = find_config_path(args.config)
    if write_default_config(dest, overwrite=args.force):
        print(f"Config: {dest}")
    else:
        print(f"Config: {dest} (exists, kept; --force to overwrite)")
    print(f"Log: {get_paths().log_path}")
    return 0


def _cmd_config_get(args: argparse.Namespace) -> int:
    value = get_value(find_config_path(args.config), args.key)
    print(json.dumps(value))
    return 0


def _cmd_config_set(args: argparse.Namespace) -> int:
    cfg_path = find_config_path(args.config)
    value = set_value(cfg_path, args.key, args.value)
    print(f"{cfg_path}: {args.key} = {json.dumps(value)}")
    return 0


def _cmd_config_keys(args: argparse.Namespace) -> int:
    for key in known_keys():
        print(key)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="better-launcher", description="Desktop application launcher")
    p.add_argument("--config", default=None, help="Path to config.yaml (default: XDG config dir)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_list = sub.add_parser("list", help="List discovered applications")
    p_list.add_argument("--json", action="store_true", help="JSON output")
    p_list.set_defaults(func=_cmd_list)

    p_query = sub.add_parser("query", help="Show what the search box would show for TEXT")
    p_query.add_argument("text")
    p_query.set_defaults(func=_cmd_query)

    p_run = sub.add_parser("run", help="Search for TEXT and commit the selected row")
    p_run.add_argument("text")
    p_run.set_defaults(func=_cmd_run)

    p_calc = sub.add_parser("calc", help="Evaluate an arithmetic expression")
    p_calc.add_argument("expr")
    p_calc.set_defaults(func=_cmd_calc)

    p_init = sub.add_parser("init", help="Write the default config.yaml (to --config if given)")
    p_init.add_argument("--force", action="store_true", help="Overwrite an existing file")
    p_init.set_defaults(func=_cmd_init)

    p_cfg = sub.add_parser("config", help="Read or change config values")
    cfg_sub = p_cfg.add_subparsers(dest="cfg_cmd", required=True)

    p_get = cfg_sub.add_parser("get", help="Print a value")
    p_get.add_argument("key", help="e.g. query.calculator")
    p_get.set_defaults(func=_cmd_config_get)

    p_set = cfg_sub.add_parser("set", help="Set a value")
    p_set.add_argument("key", help="e.g. logging.level")
    p_set.add_argument("value", help="YAML value, e.g. true / DEBUG / \"[~/apps]\"")
    p_set.set_defaults(func=_cmd_config_set)

    p_keys = cfg_sub.add_parser("keys", help="List settable options")
    p_keys.set_defaults(func=_cmd_config_keys)

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    try:
        return int(args.func(args))
    except ConfigError as e:
        print(f"config error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
