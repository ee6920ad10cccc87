from okx_rest.executors.aiohttp import AiohttpHttpExecutor
from okx_rest.executors.defaults import DEFAULT_HTTP_EXECUTOR
from okx_rest.executors.httpx import HttpxHttpExecutor
from okx_rest.executors.interface import HttpExecutor, HttpResponse
from okx_rest.executors.requests import RequestsHttpExecutor

__all__ = [
    "HttpExecutor",
    "HttpResponse",
    "HttpxHttpExecutor",
    "AiohttpHttpExecutor",
    "RequestsHttpExecutor",
    "DEFAULT_HTTP_EXECUTOR",
]
