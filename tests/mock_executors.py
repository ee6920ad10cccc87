"""Staged-output stand-in for an HTTP executor.

Tests stage the responses (or exceptions) the next requests should produce,
then inspect ``call_log`` to see exactly what the client sent.
"""

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Iterable, NamedTuple, TypeAlias

from okx_rest.executors import HttpExecutor
from okx_rest.executors.interface import HttpResponse


class MockExecutorException(Exception):
    pass


class InputPack(NamedTuple):
    function_name: str
    # (method, url, headers, content, proxy)
    arg_pack: tuple


class MockOutput:
    pass


class MockValidationFailure(MockExecutorException):
    """A staged call_validation rejected the request it was matched with."""


class MockOutputExhausted(MockExecutorException):
    """A request arrived with nothing staged for it."""


class MockOutputNotExhausted(MockExecutorException):
    """The test finished with staged outputs left over."""


# returns False (or raises MockValidationFailure) when the request is not the expected one
InputValidation: TypeAlias = Callable[[InputPack], bool]


@dataclass
class MockExceptionOutput(MockOutput):
    exception: Exception
    call_validation: InputValidation | None = None


@dataclass
class MockSuccessfulOutput(MockOutput):
    # an HttpResponse, or a bare JSON body served with status 200
    output: Any
    call_validation: InputValidation | None = None


def ok(body: Any, status: int = 200) -> HttpResponse:
    return HttpResponse(status=status, body=body)


class MockHttpExecutor(HttpExecutor):
    def __init__(self):
        self.call_log: list[InputPack] = []
        self.staged_outputs: deque[MockOutput] = deque()
        self.closed = False

    def stage_output(self, output: MockOutput | Iterable[MockOutput]) -> None:
        if isinstance(output, MockOutput):
            self.staged_outputs.append(output)
        else:
            self.staged_outputs.extend(output)

    def _replay(self, input_pack: InputPack) -> HttpResponse:
        self.call_log.append(input_pack)
        if not self.staged_outputs:
            raise MockOutputExhausted(input_pack)

        staged = self.staged_outputs.popleft()
        if staged.call_validation is not None and not staged.call_validation(input_pack):
            raise MockValidationFailure(input_pack)

        if isinstance(staged, MockExceptionOutput):
            raise staged.exception
        if isinstance(staged, MockSuccessfulOutput):
            if isinstance(staged.output, HttpResponse):
                return staged.output
            return ok(staged.output)
        raise MockExecutorException(f"Unexpected staged mock {staged=}")

    async def send_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: bytes | None = None,
        proxy: str | None = None,
    ) -> HttpResponse:
        return self._replay(
            InputPack("send_request", (method, url, headers, content, proxy))
        )

    async def close(self) -> None:
        self.closed = True
