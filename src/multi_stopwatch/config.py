from __future__ import annotations

import os
import logging

import dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from .broadcaster import DEFAULT_INTERVAL

ENV_PREFIX = 'STOPWATCH_'
LOG_FORMAT = '%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s'

class Settings(BaseModel):
    poll_interval: float = DEFAULT_INTERVAL
    join_timeout: float | None = 5.0
    log_file: str | None = None
    log_level: str = 'INFO'

    model_config = ConfigDict(
        frozen=True,
    )

    @field_validator('poll_interval')
    @classmethod
    def validate_poll_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError('poll_interval must be positive')
        return v

    @field_validator('join_timeout')
    @classmethod
    def validate_join_timeout(cls, v: float | None) -> float | None:
        if v is not None and v < 0:
            raise ValueError('join_timeout must not be negative')
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f'unknown log level {v!r}')
        return level

    @classmethod
    def fromEnv(cls, env_file: str | None = None) -> Settings:
        '''
        Reads `STOPWATCH_*` variables, after loading `env_file` (or
        a `.env` found upward from the cwd) into the environment.
        Variables already set win over the file.
        '''
        dotenv.load_dotenv(env_file or dotenv.find_dotenv(usecwd=True))
        raw = {}
        for field in cls.model_fields:
            value = os.getenv(ENV_PREFIX + field.upper())
            if value is None or not value.strip():
                continue
            raw[field] = value.strip()
        return cls.model_validate(raw)

def setupLogging(settings: Settings, tui: bool = False) -> None:
    '''
    A full-screen UI owns the terminal, so without a log file its
    records go to the Textual devtools console instead of stderr.
    '''
    if settings.log_file is not None:
        logging.basicConfig(
            filename=settings.log_file, level=settings.log_level,
            format=LOG_FORMAT, force=True,
        )
    elif tui:
        from textual.logging import TextualHandler
        logging.basicConfig(
            handlers=[TextualHandler()], level=settings.log_level,
            format=LOG_FORMAT, force=True,
        )
    else:
        logging.basicConfig(
            level=settings.log_level, format=LOG_FORMAT, force=True,
        )
