from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, RootModel, StrictStr


class Update(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: StrictStr
    value: StrictStr


class LogRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(alias="update-name")
    old: List[Update]
    new: List[Update]
    info: List[Update]


class SourceFileLog(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(alias="file-name")
    logs: List[LogRecord] = Field(alias="log")


class LogDocument(RootModel[List[SourceFileLog]]):
    """The whole input: source-file logs in document order."""

    model_config = ConfigDict(frozen=True)

    @property
    def files(self) -> List[SourceFileLog]:
        return self.root
