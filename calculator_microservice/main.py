"""
Command-line entrypoint of the calculator microservice.

Sub-commands:
- ``serve`` starts the HTTP server with uvicorn
- ``call`` sends one operation to a running server and prints the JSON result

Arguments are validated with the same pydantic models the service uses,
so a bad host or port is reported before anything is started.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

import httpx
from pydantic import BaseModel, ValidationError
import uvicorn

from calculator_microservice.client.client import CalculatorClient
from calculator_microservice.common.exceptions import CalculatorError
from calculator_microservice.common.operations import OPERATIONS
from calculator_microservice.common.settings import ServiceSettings
from calculator_microservice.server.app import create_app


class CallArgs(BaseModel):
    """
    Pydantic model used to validate the arguments of ``call``.

    Attributes
    ----------
    operation : str
        Route name of the operation.
    num1 : float
        First operand.
    num2 : float, optional
        Second operand, omitted for unary operations.
    """

    operation: str
    num1: float
    num2: Optional[float] = None


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser with its ``serve`` and ``call`` sub-commands.

    :return: Configured parser
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(prog="calculator-microservice", description="Calculator microservice")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Start the HTTP server")
    serve.add_argument("--host", help="Address to bind (default: CALCULATOR_HOST or 127.0.0.1)")
    serve.add_argument("--port", type=int, help="Port to listen on (default: CALCULATOR_PORT or 3000)")
    serve.add_argument("--log-dir", type=Path, help="Directory for error.log and combined.log")
    serve.add_argument("--log-level", help="Minimum log level (default: INFO)")

    call = commands.add_parser("call", help="Send one operation to a running server")
    call.add_argument("operation", choices=sorted(OPERATIONS), help="Operation to compute")
    call.add_argument("num1", help="First operand")
    call.add_argument("num2", nargs="?", help="Second operand, omitted for sqrt")
    call.add_argument("--host", default="127.0.0.1", help="Server host address")
    call.add_argument("--port", type=int, default=3000, help="Server HTTP port")

    return parser


def serve(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """
    Start uvicorn with settings from the environment and the command line.

    The server runs until interrupted.
    """
    try:
        settings = ServiceSettings.from_env(
            host=args.host, port=args.port, log_dir=args.log_dir, log_level=args.log_level
        )
    except ValidationError as exc:
        parser.error(str(exc))

    app = create_app(settings)
    # Logging is configured by the application lifespan, not by uvicorn
    uvicorn.run(app, host=str(settings.host), port=settings.port, log_config=None)


def call(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    """
    Compute one operation on a running server and print the JSON result.

    :return: Process exit code, 0 on success
    :rtype: int
    """
    try:
        call_args = CallArgs(operation=args.operation, num1=args.num1, num2=args.num2)
        client = CalculatorClient(host=args.host, port=args.port)
    except ValidationError as exc:
        parser.error(str(exc))

    try:
        result = client.compute(call_args.operation, call_args.num1, call_args.num2)
    except CalculatorError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    except httpx.HTTPError as exc:
        print(f"error: could not reach {client.base_url}: {exc}", file=sys.stderr)
        return 1

    print(result.model_dump_json())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function executed by the ``calculator-microservice`` script.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        serve(args, parser)
        return 0
    return call(args, parser)


if __name__ == "__main__":
    sys.exit(main())
