"""
FastAPI application exposing the calculator operations over HTTP.

Every operation route runs the same two steps in sequence:
    1. validate the raw query-string operands
    2. dispatch the validated operands to the operation
and turns any failure into a JSON ``{"error": ...}`` body.
"""
from contextlib import asynccontextmanager
import logging
from typing import Callable, Optional

from fastapi import APIRouter, FastAPI
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from calculator_microservice import __version__
from calculator_microservice.common.exceptions import CalculatorError
from calculator_microservice.common.logger import configure_logging, logger as default_logger, shutdown_logging
from calculator_microservice.common.models import ErrorResponse
from calculator_microservice.common.operations import OperationDispatcher
from calculator_microservice.common.settings import ServiceSettings
from calculator_microservice.common.validator import validate_operands

GREETING = "Hello! Calculator microservice is running with advanced operations."
INTERNAL_ERROR = "Internal server error."


def json_response(model: BaseModel, status_code: int = 200) -> Response:
    """
    Serialize a pydantic model to a JSON response.

    Pydantic writes NaN and +/-Infinity as ``null``, where the default
    FastAPI encoder would refuse them.

    :param BaseModel model: Response body
    :param int status_code: HTTP status code

    :return: JSON response
    :rtype: Response
    """
    return Response(content=model.model_dump_json(), status_code=status_code, media_type="application/json")


def handle_operation(
    name: str,
    num1: Optional[str],
    num2: Optional[str],
    dispatcher: OperationDispatcher,
    logger: logging.Logger,
) -> Response:
    """
    Validate the operands, compute the operation and build the response.

    :param str name: Route name of the operation
    :param num1: Raw first operand
    :param num2: Raw second operand
    :param OperationDispatcher dispatcher: Dispatcher computing the result
    :param logging.Logger logger: Sink for request events

    :return: 200 with the result, the error's status code on a rejected request, 500 otherwise
    :rtype: Response
    """
    try:
        operation = dispatcher.get(name)
        operands = validate_operands(num1, num2, require_num2=operation.is_binary, logger=logger)
        return json_response(dispatcher.dispatch(name, operands))
    except CalculatorError as exc:
        return json_response(ErrorResponse(error=exc.message), status_code=exc.status_code)
    except Exception:
        # The request fails, the service keeps serving
        logger.exception(f"💥 Unexpected error while handling /{name}")
        return json_response(ErrorResponse(error=INTERNAL_ERROR), status_code=500)


def build_router(dispatcher: OperationDispatcher, logger: logging.Logger) -> APIRouter:
    """
    Create the greeting route and one GET route per registered operation.

    :param OperationDispatcher dispatcher: Dispatcher shared by every route
    :param logging.Logger logger: Sink for request events

    :return: Router to include in the application
    :rtype: APIRouter
    """
    router = APIRouter()

    @router.get("/", response_class=PlainTextResponse)
    def index() -> str:
        """Greeting, whatever the query string holds."""
        return GREETING

    def make_endpoint(name: str) -> Callable[..., Response]:
        # Handlers are plain functions, FastAPI runs them in its thread pool
        def endpoint(num1: Optional[str] = None, num2: Optional[str] = None) -> Response:
            return handle_operation(name, num1, num2, dispatcher, logger)

        endpoint.__name__ = f"{name}_endpoint"
        return endpoint

    for name, operation in dispatcher.operations.items():
        router.add_api_route(
            f"/{name}",
            make_endpoint(name),
            methods=["GET"],
            name=name,
            summary=f"Compute the {operation.label} of the operands",
        )

    return router


def create_app(
    settings: Optional[ServiceSettings] = None,
    logger: logging.Logger = default_logger,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Logging sinks are attached when the application starts and released
    when it stops.

    :param settings: Service settings, read from the environment when omitted
    :param logging.Logger logger: Logger injected into the validator and the dispatcher

    :return: Configured application
    :rtype: FastAPI
    """
    settings = settings or ServiceSettings.from_env()
    dispatcher = OperationDispatcher(logger=logger)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        listener = configure_logging(settings.log_dir, settings.log_level, settings.service_name, target=logger)
        logger.info(f"🖥️ Server started on port {settings.port}")
        try:
            yield
        finally:
            logger.info("🖥️ Server stopped")
            shutdown_logging(listener, target=logger)

    app = FastAPI(
        title="Calculator Microservice",
        description="Arithmetic operations over HTTP GET requests",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.include_router(build_router(dispatcher, logger))
    return app
