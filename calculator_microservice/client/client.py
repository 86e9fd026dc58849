"""HTTP client."""
import math
from typing import Dict, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress, ValidationError

from calculator_microservice.common.exceptions import CalculatorError
from calculator_microservice.common.models import ErrorResponse, OperationResult


class CalculatorClient(BaseModel):
    """
    HTTP client sending arithmetic operations to the calculator service.

    The HTTP client:
    - sends one GET request per operation with the operands as query parameters
    - parses the JSON result into an OperationResult
    - raises a CalculatorError carrying the server's message on rejection
    """

    # Make the Pydantic instance immutable (read-only), to prevent errors
    # that could be caused by changes to the network configuration during execution.
    model_config = ConfigDict(frozen=True)

    host: IPvAnyAddress = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=3000, ge=1, le=65535, description="Server HTTP port")
    timeout: float = Field(default=5.0, gt=0, description="Request timeout in seconds")

    @property
    def base_url(self) -> str:
        """Root URL of the service."""
        host = f"[{self.host}]" if self.host.version == 6 else str(self.host)
        return f"http://{host}:{self.port}"

    def compute(
        self,
        operation: str,
        num1: float,
        num2: Optional[float] = None,
        session: Optional[httpx.Client] = None,
    ) -> OperationResult:
        """
        Ask the service to compute an operation.

        :param str operation: Route name of the operation, e.g. ``"divide"``
        :param float num1: First operand
        :param num2: Second operand, omitted for unary operations
        :param session: HTTP session to reuse, a short-lived one is opened when omitted

        :return: Result reported by the service
        :rtype: OperationResult
        :raises CalculatorError: If the service rejects the request or answers with an unexpected body
        """
        params: Dict[str, str] = {"num1": str(num1)}
        if num2 is not None:
            params["num2"] = str(num2)
        url = f"{self.base_url}/{operation}"

        if session is None:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(url, params=params)
        else:
            response = session.get(url, params=params)

        return self._parse(response)

    def _parse(self, response: httpx.Response) -> OperationResult:
        """
        Convert a service response into a result or raise its error.

        :param httpx.Response response: Response of the service

        :return: Parsed result
        :rtype: OperationResult
        :raises CalculatorError: If the response is an error or cannot be parsed
        """
        try:
            payload = response.json()
            if response.is_success:
                # Non-finite results travel as null
                if isinstance(payload, dict) and "result" in payload and payload["result"] is None:
                    payload["result"] = math.nan
                return OperationResult.model_validate(payload)
            error = ErrorResponse.model_validate(payload)
        except (ValueError, ValidationError) as exc:
            raise CalculatorError(
                f"Unexpected response from server ({response.status_code})", status_code=response.status_code
            ) from exc
        raise CalculatorError(error.error, status_code=response.status_code)
