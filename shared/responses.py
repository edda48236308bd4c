from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.exceptions import ResourceNotFoundException


# ------------------------
# Standard API Response
# ------------------------
class APIResponse(JSONResponse):
    def __init__(
        self,
        success: bool,
        data: Optional[Any] = None,
        message: Optional[str] = None,
        status_code: int = 200,
    ):
        content = {"success": success, "data": data, "message": message, "status": status_code}
        super().__init__(content=content, status_code=status_code)


# ------------------------
# Exception Handling
# ------------------------
def register_exception_handlers(app: FastAPI, logger):
    """
    Map ResourceNotFoundException to a 404 envelope.

    Anything else is left to the framework and surfaces as a plain 500.
    """

    @app.exception_handler(ResourceNotFoundException)
    async def resource_not_found_handler(request: Request, exc: ResourceNotFoundException):
        trace_id = getattr(request.state, "trace_id", "N/A")
        logger.warning(f"[TRACE {trace_id}] Not found: {exc.message}")
        return APIResponse(success=False, message=exc.message, status_code=404)

    return resource_not_found_handler
