import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from . import (
    ALPHABET,
    Base50Error,
    decode,
    decode_len,
    encode_len,
    encode_to_string,
)
from .config import CONFIG_PATH, Base50Config, load_config, save_config
from .formats import dump_bytes, group_text, load_bytes
from .history import HISTORY_PATH, log_event, read_events


def _settings(args: argparse.Namespace) -> Base50Config:
    return args.settings


def _use_hex(args: argparse.Namespace) -> bool:
    if args.hex is not None:
        return args.hex
    return _settings(args).hex


def _load_input(args: argparse.Namespace) -> bytes:
    if args.in_file == "-":
        return sys.stdin.buffer.read()
    if args.in_file:
        with open(args.in_file, "rb") as fh:
            return fh.read()
    if args.text:
        try:
            return " ".join(args.text).encode(args.encoding or "utf-8")
        except LookupError as exc:
            raise argparse.ArgumentTypeError(f"unknown encoding: {args.encoding}") from exc
    raise argparse.ArgumentTypeError("No input given: pass TEXT arguments or --in-file.")


def _write_output(args: argparse.Namespace, output: bytes) -> None:
    if args.out_file and args.out_file != "-":
        with open(args.out_file, "wb") as fh:
            fh.write(output)
        return
    stream = sys.stdout
    stream.flush()
    stream.buffer.write(output)
    stream.buffer.flush()


def _run_encode(args: argparse.Namespace) -> Optional[str]:
    settings = _settings(args)
    data = load_bytes(_load_input(args), "hex" if _use_hex(args) else "raw")
    encoded = encode_to_string(data)
    group_size = args.group if args.group is not None else settings.group_size
    encoded = group_text(encoded, group_size, args.separator or settings.separator)
    args.byte_count = len(data)
    if args.out_file and args.out_file != "-":
        _write_output(args, (encoded + "\n").encode("ascii"))
        return None
    return encoded


def _run_decode(args: argparse.Namespace) -> Optional[str]:
    decoded = decode(_load_input(args))
    args.byte_count = len(decoded)
    if _use_hex(args):
        text = dump_bytes(decoded, "hex").decode("ascii")
        if args.out_file and args.out_file != "-":
            _write_output(args, (text + "\n").encode("ascii"))
            return None
        return text
    _write_output(args, decoded)
    return None


def _run_len(args: argparse.Namespace) -> str:
    if args.count < 0:
        raise argparse.ArgumentTypeError("count must be >= 0")
    if args.mode == "encode":
        return str(encode_len(args.count))
    return str(decode_len(args.count))


def _run_config(args: argparse.Namespace) -> str:
    path = Path(args.config)
    stored = load_config(path, use_env=False)

    changed = False
    for field_name in ["hex", "history", "group_size", "separator"]:
        value = getattr(args, f"set_{field_name}")
        if value is not None:
            setattr(stored, field_name, value)
            changed = True

    if changed:
        save_config(stored, path)

    merged = load_config(path)
    lines = [f"config file: {path}"]
    lines.extend(f"{name}: {value!r}" for name, value in merged.to_dict().items())
    if changed:
        lines.append("Configuration saved; BASE50_* environment variables still take precedence.")
    return "\n".join(lines)


def _run_history(args: argparse.Namespace) -> str:
    events = read_events(Path(args.history_file), limit=args.limit)
    return "\n".join(json.dumps(event, ensure_ascii=False) for event in events)


def _add_io_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("text", nargs="*", help="Input given as arguments (ignored if --in-file).")
    p.add_argument("-i", "--in-file", help='Read input from file ("-" for stdin).')
    p.add_argument("-o", "--out-file", help='Write result to file ("-" for stdout).')
    p.add_argument(
        "-x",
        "--hex",
        dest="hex",
        action="store_const",
        const=True,
        default=None,
        help="Treat raw input (encode) or output (decode) as base16.",
    )
    p.add_argument(
        "--raw",
        dest="hex",
        action="store_const",
        const=False,
        help="Disable hex mode even if the configuration enables it.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="base50", description="Base50 encoder/decoder.")
    parser.add_argument(
        "--no-history", action="store_true", help="Do not record the operation in history."
    )
    parser.add_argument("--config", default=str(CONFIG_PATH), help="Configuration file path.")
    parser.add_argument("--history-file", default=str(HISTORY_PATH), help="History file path.")
    parser.add_argument("--encoding", help="Encoding of TEXT arguments (default utf-8).")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser("encode", help="Encode bytes to base50")
    _add_io_arguments(encode_parser)
    encode_parser.add_argument(
        "--group", type=int, help="Insert a separator every N characters (0 disables)."
    )
    encode_parser.add_argument("--separator", help='Group separator: space, tab, newline or "_".')
    encode_parser.set_defaults(func=_run_encode)

    decode_parser = subparsers.add_parser("decode", help="Decode base50 to bytes")
    _add_io_arguments(decode_parser)
    decode_parser.set_defaults(func=_run_decode)

    len_parser = subparsers.add_parser("len", help="Show encoded/decoded lengths")
    len_parser.add_argument("mode", choices=["encode", "decode"])
    len_parser.add_argument(
        "count",
        type=int,
        help="Bytes to encode, or base50 characters to decode (without the stop character).",
    )
    len_parser.set_defaults(func=_run_len)

    alphabet_parser = subparsers.add_parser("alphabet", help="Show the base50 alphabet")
    alphabet_parser.set_defaults(func=lambda args: ALPHABET)

    config_parser = subparsers.add_parser("config", help="Show or update saved defaults")
    config_parser.add_argument(
        "--hex", dest="set_hex", action="store_const", const=True, help="Default to hex mode."
    )
    config_parser.add_argument(
        "--no-hex", dest="set_hex", action="store_const", const=False, help="Default to raw mode."
    )
    config_parser.add_argument(
        "--history", dest="set_history", action="store_const", const=True, help="Record history."
    )
    config_parser.add_argument(
        "--no-history",
        dest="set_history",
        action="store_const",
        const=False,
        help="Stop recording history.",
    )
    config_parser.add_argument("--group-size", dest="set_group_size", type=int, help="Default grouping.")
    config_parser.add_argument("--separator", dest="set_separator", help="Default group separator.")
    config_parser.set_defaults(func=_run_config)

    history_parser = subparsers.add_parser("history", help="Show recent operations")
    history_parser.add_argument("--limit", type=int, default=20, help="Number of entries (0 for all).")
    history_parser.set_defaults(func=_run_history)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.settings = load_config(Path(args.config))
        result = args.func(args)
    except Base50Error as exc:
        message = f"decode input err: {exc}\n"
        if exc.decoded:
            message += f"decoded before error: {exc.decoded.hex()}\n"
        parser.exit(1, message)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except (OSError, ValueError) as exc:
        parser.exit(1, f"{parser.prog}: error: {exc}\n")

    if result is not None:
        print(result)
    if args.no_history or not args.settings.history:
        return
    log_event(
        action=args.command,
        payload={
            "input": " ".join(args.text) if getattr(args, "text", None) else None,
            "in_file": getattr(args, "in_file", None),
            "out_file": getattr(args, "out_file", None),
            "bytes": getattr(args, "byte_count", None),
        },
        path=Path(args.history_file),
    )


if __name__ == "__main__":
    main()
