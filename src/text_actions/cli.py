# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Command line interface for Text Actions.

Usage:
    ta                          Status + help (default)
    ta actions                  List action groups and action ids
    ta run <action> [text]      Run an action (text from argument or stdin)
        --from <language>       Input language for translation actions
        --to <language>         Output language for translation actions
    ta models                   List models served by the current provider
    ta provider                 Show current provider + list available
    ta provider <name>          Switch the current provider
    ta provider delete <name>   Remove a provider
    ta model                    Show the current model
    ta model <name>             Set the model to use
    ta languages                List languages and the default pair
    ta markdown [on|off]        Show or set Markdown output
    ta settings path            Print path to the settings file
    ta settings reset           Restore default settings
    ta config path              Print path to config file
    ta config set <s.key> <v>   Set one config.toml field
    ta version                  Show version
"""

import sys
from typing import List, Optional, Tuple

from .actions import ActionRequest
from .app import TextActions
from .config import CONFIG_FILE, get_config, update_config_field
from .errors import ActionError
from .settings import ModelConfig
from .utils import C_BOLD, C_CYAN, C_DIM, C_GREEN, C_RED, C_RESET, C_YELLOW, ConsoleLogger, NullLogger


def _app() -> TextActions:
    """Build the app. Logs go to stderr so stdout carries only results."""
    config = get_config()
    logger = ConsoleLogger(debug=True, file=sys.stderr) if config.log.debug else NullLogger()
    return TextActions.from_config(config, logger=logger)


def _fail(msg: str, hint: Optional[str] = None):
    print(f"{C_RED}{msg}{C_RESET}", file=sys.stderr)
    if hint:
        print(f"{C_DIM}{hint}{C_RESET}", file=sys.stderr)
    sys.exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_actions():
    """List action groups."""
    with _app() as app:
        groups = app.actions.get_action_groups()
    for group in groups:
        print(f"  {C_BOLD}{group.name}{C_RESET}")
        width = max(len(a.id) for a in group.actions)
        for action in group.actions:
            print(f"    {C_CYAN}{action.id:<{width}}{C_RESET}  {C_DIM}{action.text}{C_RESET}")
        print()


def _parse_run_args(args: List[str]) -> Tuple[str, str, Optional[str], Optional[str]]:
    """Split `run` arguments into (action, text, from, to)."""
    positional = []
    source = target = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--from", "--to"):
            if i + 1 >= len(args):
                _fail(f"Missing value for {arg}")
            if arg == "--from":
                source = args[i + 1]
            else:
                target = args[i + 1]
            i += 2
            continue
        positional.append(arg)
        i += 1

    if not positional:
        _fail("Missing action id", "Usage: ta run <action> [text] [--from L] [--to L]")
    action_id, words = positional[0], positional[1:]

    if words:
        text = " ".join(words)
    elif not sys.stdin.isatty():
        text = sys.stdin.read()
    else:
        text = ""
    return action_id, text, source, target


def cmd_run(args: List[str]):
    """Run one action and print the result."""
    action_id, text, source, target = _parse_run_args(args)
    app = _app()
    try:
        if source is None or target is None:
            languages = app.settings.get_current_settings().language_config
            source = source or languages.default_input_language
            target = target or languages.default_output_language
        request = ActionRequest(id=action_id, input_text=text, input_language=source, output_language=target)
        result = app.actions.process_action(request)
    except ActionError as e:
        _fail(f"Action failed: {e}")
    finally:
        app.close()
    print(result)


def cmd_models():
    """List models for the current provider."""
    app = _app()
    try:
        settings = app.settings.get_current_settings()
        models = app.settings.get_models()
    except ActionError as e:
        _fail(f"Cannot list models: {e}")
    finally:
        app.close()

    current = settings.model_config.model_name
    print(f"  {C_DIM}provider:{C_RESET} {C_CYAN}{settings.current_provider.provider_name}{C_RESET}")
    print()
    if not models:
        print(f"  {C_YELLOW}No models listed{C_RESET}")
        return
    for model in models:
        marker = f" {C_GREEN}(active){C_RESET}" if model == current else ""
        print(f"    {C_CYAN}{model}{C_RESET}{marker}")


def cmd_provider(args: List[str]):
    """Show, switch or delete providers."""
    app = _app()
    try:
        if not args:
            settings = app.settings.get_current_settings()
            current = settings.current_provider.provider_name
            print(f"  {C_DIM}current:{C_RESET} {C_CYAN}{current}{C_RESET}")
            print()
            print(f"  {C_BOLD}Available:{C_RESET}")
            for p in settings.available_providers:
                marker = f" {C_GREEN}(active){C_RESET}" if p.provider_name == current else ""
                print(f"    {C_CYAN}{p.provider_name}{C_RESET}  {C_DIM}{p.base_url} ({p.provider_type}){C_RESET}{marker}")
            return

        if args[0] == "delete":
            if len(args) < 2:
                _fail("Missing provider name", "Usage: ta provider delete <name>")
            name = " ".join(args[1:])
            app.settings.delete_provider(name)
            print(f"{C_GREEN}Provider deleted:{C_RESET} {name}")
            return

        name = " ".join(args)
        app.settings.select_provider(name)
        print(f"{C_GREEN}Provider set to:{C_RESET} {name}")
    except ActionError as e:
        _fail(str(e))
    finally:
        app.close()


def cmd_model(args: List[str]):
    """Show or set the model name."""
    app = _app()
    try:
        model = app.settings.get_current_settings().model_config
        if not args:
            print(f"  {C_DIM}model:{C_RESET} {C_CYAN}{model.model_name or '(none)'}{C_RESET}")
            temp = str(model.temperature) if model.is_temperature_enabled else "off"
            print(f"  {C_DIM}temperature:{C_RESET} {temp}")
            return
        app.settings.update_model_config(ModelConfig(
            model_name=args[0],
            is_temperature_enabled=model.is_temperature_enabled,
            temperature=model.temperature,
        ))
        print(f"{C_GREEN}Model set to:{C_RESET} {args[0]}")
    except ActionError as e:
        _fail(str(e))
    finally:
        app.close()


def cmd_languages():
    """List languages and the default pair."""
    app = _app()
    try:
        config = app.settings.get_current_settings().language_config
    except ActionError as e:
        _fail(str(e))
    finally:
        app.close()
    print(f"  {C_DIM}default:{C_RESET} {config.default_input_language} -> {config.default_output_language}")
    print()
    for language in config.languages:
        print(f"    {language}")


def cmd_markdown(args: List[str]):
    """Show or set Markdown output."""
    app = _app()
    try:
        if not args:
            enabled = app.settings.get_current_settings().use_markdown_for_output
            print(f"  {C_DIM}markdown:{C_RESET} {'on' if enabled else 'off'}")
            return
        if args[0] not in ("on", "off"):
            _fail(f"Unknown value: {args[0]}", "Usage: ta markdown [on|off]")
        app.settings.set_use_markdown(args[0] == "on")
        print(f"{C_GREEN}Markdown output:{C_RESET} {args[0]}")
    except ActionError as e:
        _fail(str(e))
    finally:
        app.close()


def cmd_settings(args: List[str]):
    """Settings file helpers."""
    if not args:
        _fail("Missing settings subcommand", "Usage: ta settings [path|reset]")
    app = _app()
    try:
        if args[0] == "path":
            print(app.settings.get_settings_file_path())
            return
        if args[0] == "reset":
            app.settings.reset_to_default()
            print(f"{C_GREEN}Settings reset to defaults{C_RESET}")
            return
    except ActionError as e:
        _fail(str(e))
    finally:
        app.close()
    _fail(f"Unknown settings subcommand: {args[0]}", "Usage: ta settings [path|reset]")


def _parse_config_value(raw: str):
    """Turn a command line value into the bool/int/float/str it spells."""
    if raw in ("true", "false"):
        return raw == "true"
    for kind in (int, float):
        try:
            return kind(raw)
        except ValueError:
            pass
    return raw


def cmd_config(args: List[str]):
    """Print path to config, or set one field."""
    if args and args[0] == "path":
        print(CONFIG_FILE)
        return
    if args and args[0] == "set":
        if len(args) != 3 or "." not in args[1]:
            _fail("Invalid arguments", "Usage: ta config set <section>.<key> <value>")
        section, key = args[1].split(".", 1)
        value = _parse_config_value(args[2])
        if not update_config_field(section, key, value):
            _fail(f"Could not set {section}.{key} in {CONFIG_FILE}")
        print(f"{C_GREEN}{section}.{key} set to:{C_RESET} {args[2]}")
        return
    _fail(f"Unknown config subcommand: {args[0] if args else ''}", "Usage: ta config [path|set]")


def cmd_version():
    """Show version."""
    from . import __version__
    print(f"Text Actions {__version__}")


def _print_help():
    """Print grouped help listing."""
    groups = [
        ("Actions", [
            ("ta actions",                "List available actions"),
            ("ta run <action> [text]",    "Run an action (stdin if no text)"),
        ]),
        ("Provider", [
            ("ta provider [name]",        "Show or switch provider"),
            ("ta provider delete <name>", "Remove a provider"),
            ("ta models",                 "List models of the current provider"),
            ("ta model [name]",           "Show or set the model"),
        ]),
        ("Settings", [
            ("ta languages",              "List languages and defaults"),
            ("ta markdown [on|off]",      "Show or set Markdown output"),
            ("ta settings path|reset",    "Settings file helpers"),
            ("ta config path",            "Print config file path"),
            ("ta config set <s.k> <v>",   "Set a config.toml field"),
            ("ta version",                "Show version"),
        ]),
    ]
    width = max(len(c) for _, cmds in groups for c, _ in cmds)
    for group_name, cmds in groups:
        print(f"  {C_BOLD}{group_name}{C_RESET}")
        for cmd, desc in cmds:
            print(f"    {C_CYAN}{cmd:<{width}}{C_RESET}  {C_DIM}{desc}{C_RESET}")
        print()


def cmd_default():
    """Default: header + help."""
    print()
    print(f"  {C_BOLD}╭────────────────────────────────────────╮{C_RESET}")
    print(f"  {C_BOLD}│{C_RESET}  {C_CYAN}Text Actions{C_RESET} · CLI                    {C_BOLD}│{C_RESET}")
    print(f"  {C_BOLD}╰────────────────────────────────────────╯{C_RESET}")
    print()
    print(f"  Config:  {C_DIM}{CONFIG_FILE}{C_RESET}")
    print()
    _print_help()


def cli_main():
    """Entry point for the ta CLI."""
    args = sys.argv[1:]

    if not args:
        cmd_default()
        return

    cmd = args[0]
    rest = args[1:]

    if cmd == "actions":
        cmd_actions()
    elif cmd == "run":
        cmd_run(rest)
    elif cmd == "models":
        cmd_models()
    elif cmd == "provider":
        cmd_provider(rest)
    elif cmd == "model":
        cmd_model(rest)
    elif cmd == "languages":
        cmd_languages()
    elif cmd == "markdown":
        cmd_markdown(rest)
    elif cmd == "settings":
        cmd_settings(rest)
    elif cmd == "config":
        cmd_config(rest)
    elif cmd == "version":
        cmd_version()
    elif cmd in ("-h", "--help", "help"):
        _print_help()
    else:
        _fail(f"Unknown command: {cmd}", "Run 'ta' for usage.")
