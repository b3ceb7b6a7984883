"""Pydantic models for front-end input validation."""

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import InvalidParametersError


class PluginParameters(BaseModel):
    """Parameters passed to the compiler plugin.

    protoc forwards everything after ``--scip_out=`` up to the colon as a
    free-form string; this plugin expects ``"<project root> <output file>"``.
    """

    project_root: Path = Field(..., description="Directory the index is rooted at")
    output: Path = Field(..., description="Where to write the SCIP index")

    @field_validator("project_root", "output", mode="before")
    @classmethod
    def validate_not_blank(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            raise ValueError("path must not be empty")
        return v

    @classmethod
    def from_parameter(cls, parameter: str) -> "PluginParameters":
        """Parse the plugin parameter string.

        Raises InvalidParametersError unless it holds exactly two
        whitespace-separated tokens.
        """
        tokens = parameter.split()
        if len(tokens) != 2:
            raise InvalidParametersError(
                "Plugin parameter must be '<project root> <output file>', "
                f"got {len(tokens)} token(s): {parameter!r}"
            )

        try:
            return cls(project_root=tokens[0], output=tokens[1])
        except ValidationError as e:
            raise InvalidParametersError(str(e)) from e
