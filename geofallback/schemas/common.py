# geofallback/schemas/common.py
from pydantic import BaseModel, Field


class ErrorInfo(BaseModel):
    domain: str = Field(description="Error domain", examples=["geolocation"])
    reason: str = Field(description="Machine-readable reason", examples=["notFound"])
    message: str = Field(description="Human-readable message", examples=["Not found"])


class ErrorDetail(BaseModel):
    errors: list[ErrorInfo]
    code: int = Field(description="HTTP status code")
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": {
                        "errors": [
                            {"domain": "geolocation", "reason": "notFound", "message": "Not found"}
                        ],
                        "code": 404,
                        "message": "Not found",
                    }
                }
            ]
        }
    }


class OkResponse(BaseModel):
    ok: bool = Field(description="Always true")

    model_config = {"json_schema_extra": {"examples": [{"ok": True}]}}
