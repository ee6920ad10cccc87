"""Default executor configuration.

This module defines the default HTTP executor implementation used by the
OKX client when no custom executor is provided.
"""

from typing import Type

from okx_rest.executors.httpx import HttpxHttpExecutor
from okx_rest.executors.interface import HttpExecutor

DEFAULT_HTTP_EXECUTOR: Type[HttpExecutor] = HttpxHttpExecutor
