"""
Processor metadata handed to the host by Processor.specification().
"""

from pydantic import BaseModel, ConfigDict, Field


class ParameterValidation(BaseModel):
    """A single validation rule attached to a configuration parameter."""
    
    model_config = ConfigDict(frozen=True)
    
    type: str = Field(..., description="required, greater-than or inclusion")
    value: str = Field(default="", description="Rule argument (bound or comma-separated options)")


class Parameter(BaseModel):
    """Host-facing description of one flat configuration key."""
    
    model_config = ConfigDict(frozen=True)
    
    default: str = Field(default="", description="Default value as the host writes it")
    description: str = Field(default="")
    type: str = Field(default="string", description="string, float or duration")
    validations: list[ParameterValidation] = Field(default_factory=list)


class Specification(BaseModel):
    """Static processor descriptor (name, summary, parameter schema)."""
    
    model_config = ConfigDict(frozen=True)
    
    name: str
    summary: str
    description: str
    version: str
    author: str
    parameters: dict[str, Parameter] = Field(default_factory=dict)
