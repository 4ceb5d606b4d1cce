#!/usr/bin/env python3
from __future__ import annotations

import argparse
import os
import subprocess
import sys


def run(cmd: list[str]) -> int:
    print("$", " ".join(cmd))
    return subprocess.call(cmd)


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from meetvoice_api.config import HOST, LOG_LEVEL, PORT

    uvicorn.run(
        "meetvoice_api.main:app",
        host=args.host or HOST,
        port=args.port or PORT,
        reload=args.reload,
        log_level=LOG_LEVEL.lower(),
    )
    return 0


def cmd_test(args: argparse.Namespace) -> int:
    os.environ.setdefault("PYTHONUNBUFFERED", "1")
    pytest_args = [sys.executable, "-m", "pytest"]
    if args.quiet:
        pytest_args.append("-q")
    if args.k:
        pytest_args += ["-k", args.k]
    return run(pytest_args)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="meetvoice-cli", description="MeetVoice API helper")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Run the API with uvicorn")
    p_serve.add_argument("--host", help="Bind address (default: $HOST or 0.0.0.0)")
    p_serve.add_argument("--port", type=int, help="Bind port (default: $PORT or 3000)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    p_test = sub.add_parser("test", help="Run the MeetVoice API test suite")
    p_test.add_argument("-q", "--quiet", action="store_true", help="Less pytest output")
    p_test.add_argument("-k", help="Only run tests whose name matches, e.g. -k slug")
    p_test.set_defaults(func=cmd_test)

    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
