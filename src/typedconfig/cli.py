"""typedconfig CLI: inspect contracts and read/write their options.

Usage:
    typedconfig describe myapp.settings:ServerSettings
    typedconfig get myapp.settings:ServerSettings timeout -c stores.yaml
    typedconfig set myapp.settings:ServerSettings timeout 60 -c stores.yaml
    typedconfig set myapp.settings:ServerSettings timeout --clear -c stores.yaml

Without --config, stores are taken from TYPEDCONFIG_* environment
variables (see BindingConfig.from_env).
"""

import argparse
import importlib
import logging
import sys

import yaml

from .builder import ConfigurationBuilder
from .config import BindingConfig
from .core import discover
from .errors import TypedConfigError, type_name
from .values import default_handler


def load_contract(target: str) -> type:
    """Import ``module:QualifiedName`` and return the class."""
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"Contract must be given as module:Class, got {target!r}")

    obj = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    if not isinstance(obj, type):
        raise ValueError(f"{target} is not a class")
    return obj


def _load_config(args: argparse.Namespace) -> BindingConfig:
    if args.config:
        return BindingConfig.from_file(args.config)
    return BindingConfig.from_env()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def cmd_describe(args: argparse.Namespace) -> int:
    """Print one line per option of a contract."""
    contract = load_contract(args.contract)
    descriptors = discover(contract)

    if not descriptors:
        print(f"{contract.__qualname__} declares no options")
        return 0

    for descriptor in descriptors.values():
        default = descriptor.default_value
        shown = "-" if default is None else default_handler.format(descriptor.base_type, default)
        access = "" if descriptor.writable else " (read-only)"
        print(
            f"{descriptor.name}\t{descriptor.member_name}\t"
            f"{type_name(descriptor.declared_type)}\t{shown}{access}"
        )
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    """Print the current value of an option."""
    contract = load_contract(args.contract)
    config = _load_config(args)

    with ConfigurationBuilder(contract).use_config(config).build() as binding:
        descriptor = binding.descriptors.get(args.member)
        if descriptor is None:
            print(f"Unknown option: {args.member}", file=sys.stderr)
            return 1
        value = binding.get(args.member)

    if value is None:
        print("")
    else:
        print(default_handler.format(descriptor.base_type, value))
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    """Parse a value and write it to every writable store."""
    contract = load_contract(args.contract)
    config = _load_config(args)

    with ConfigurationBuilder(contract).use_config(config).build() as binding:
        descriptor = binding.descriptors.get(args.member)
        if descriptor is None:
            print(f"Unknown option: {args.member}", file=sys.stderr)
            return 1
        if not descriptor.writable:
            print(f"Option {args.member} is read-only", file=sys.stderr)
            return 1

        if args.clear:
            binding.reset(args.member)
            print(f"Cleared {descriptor.name}")
            return 0

        if args.value is None:
            print("A value or --clear is required", file=sys.stderr)
            return 1

        ok, value = default_handler.try_parse(descriptor.base_type, args.value)
        if not ok:
            print(
                f"{args.value!r} is not a valid {type_name(descriptor.base_type)}",
                file=sys.stderr,
            )
            return 1
        binding.set(args.member, value)

    print(f"Set {descriptor.name} = {args.value}")
    return 0


def main(argv=None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="typedconfig",
        description="typedconfig - typed configuration contracts over pluggable stores",
    )
    parser.add_argument("--log-level", type=str, default=None,
                        choices=["debug", "info", "warning", "error", "critical"])
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    describe_parser = subparsers.add_parser("describe", help="List the options of a contract")
    describe_parser.add_argument("contract", help="module:Class")

    get_parser = subparsers.add_parser("get", help="Read an option")
    get_parser.add_argument("contract", help="module:Class")
    get_parser.add_argument("member", help="Member name on the contract")
    get_parser.add_argument("--config", "-c", type=str, default=None)

    set_parser = subparsers.add_parser("set", help="Write an option")
    set_parser.add_argument("contract", help="module:Class")
    set_parser.add_argument("member", help="Member name on the contract")
    set_parser.add_argument("value", nargs="?", default=None)
    set_parser.add_argument("--clear", action="store_true",
                            help="Delete the stored value so the default applies")
    set_parser.add_argument("--config", "-c", type=str, default=None)

    args = parser.parse_args(argv)

    commands = {"describe": cmd_describe, "get": cmd_get, "set": cmd_set}
    if args.command not in commands:
        parser.print_help()
        sys.exit(1)

    try:
        if args.log_level:
            _configure_logging(args.log_level)
        elif args.command != "describe":
            _configure_logging(_load_config(args).log_level)
        sys.exit(commands[args.command](args))
    except (ImportError, AttributeError) as e:
        print(f"Cannot load contract: {e}", file=sys.stderr)
        sys.exit(1)
    except TypedConfigError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    except (ValueError, yaml.YAMLError) as e:
        print(str(e), file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
