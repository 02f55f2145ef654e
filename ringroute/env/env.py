from __future__ import annotations

from typing import Callable, Dict, Literal, Union

from pydantic import BaseModel, StrictInt, StrictStr, field_validator

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    RINGROUTE_VIRTUAL_NODES: StrictInt = 160
    RINGROUTE_HASH_FUNCTION: Literal["md5", "sha256", "blake2b"] = "md5"
    RINGROUTE_LOG_LEVEL: StrictStr = "info"
    RINGROUTE_LOG_OUTPUT: Literal["stdout", "stderr"] = "stderr"

    @field_validator("RINGROUTE_VIRTUAL_NODES")
    @classmethod
    def validate_virtual_nodes(cls, value: int) -> int:
        if value < 1:
            raise ValueError("RINGROUTE_VIRTUAL_NODES must be >= 1")

        return value

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "RINGROUTE_VIRTUAL_NODES": int,
            "RINGROUTE_HASH_FUNCTION": str,
            "RINGROUTE_LOG_LEVEL": str,
            "RINGROUTE_LOG_OUTPUT": str,
        }
