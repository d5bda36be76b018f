"""Tool dispatcher: validate, call the client, wrap the outcome.

Every invocation follows the same path::

    arguments ──► args_schema.model_validate ──► handler(client, args)
                        │                              │
                        ▼                              ▼
                 ToolResult.failure          ToolResult.success
                 ("<prefix>: <why>")         (pretty JSON / confirmation)

:meth:`ToolDispatcher.invoke` is the boundary the host sees.  It always
returns exactly one :class:`ToolResult` and never raises.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Type

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from carapace.client import CarapaceClient
from carapace.exceptions import CarapaceAPIError
from carapace.schemas import (
    ContributeParams,
    ContributionRef,
    QueryParams,
    UpdateToolInput,
)

logger = logging.getLogger(__name__)

Handler = Callable[[CarapaceClient, Any], Awaitable[str]]


class ToolName:
    """Enum-like constants for the registered tool names."""

    QUERY = "carapace_query"
    CONTRIBUTE = "carapace_contribute"
    GET = "carapace_get"
    UPDATE = "carapace_update"
    DELETE = "carapace_delete"

    ALL: List[str] = [QUERY, CONTRIBUTE, GET, UPDATE, DELETE]


class ToolResult(BaseModel):
    """Envelope handed back for every invocation.

    Build it with :meth:`success` or :meth:`failure`; ``text`` is either the
    rendered payload or the human-readable error.
    """

    model_config = ConfigDict(frozen=True)

    is_error: bool
    text: str

    @property
    def ok(self) -> bool:
        return not self.is_error

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(is_error=False, text=text)

    @classmethod
    def failure(cls, text: str) -> "ToolResult":
        return cls(is_error=True, text=text)


@dataclass(frozen=True)
class ToolSpec:
    """Declarative description of one tool."""

    name: str
    description: str
    args_schema: Type[BaseModel]
    handler: Handler
    #: Leads every failure message, e.g. "Error querying Carapace".
    error_prefix: str

    def input_schema(self) -> Dict[str, Any]:
        return self.args_schema.model_json_schema(by_alias=True)


class ToolDispatcher:
    """Holds the tool specs and runs them against one client."""

    def __init__(self, client: CarapaceClient) -> None:
        self.client = client
        self._tools: Dict[str, ToolSpec] = {}

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = spec

    def specs(self) -> List[ToolSpec]:
        return list(self._tools.values())

    def input_schema(self, name: str) -> Dict[str, Any]:
        spec = self._tools.get(name)
        if spec is None:
            raise KeyError(f"Unknown tool: {name}")
        return spec.input_schema()

    async def invoke(
        self, name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> ToolResult:
        spec = self._tools.get(name)
        if spec is None:
            logger.warning("Rejected call to unknown tool %r", name)
            return ToolResult.failure(f"Unknown tool: {name}")

        logger.info("%s called", name)

        try:
            # Non-mapping arguments surface as a ValidationError here.
            args = spec.args_schema.model_validate(arguments or {})
        except ValidationError as exc:
            logger.info("%s: invalid arguments (%d errors)", name, exc.error_count())
            return ToolResult.failure(f"{spec.error_prefix}: {_describe_validation(exc)}")

        try:
            text = await spec.handler(self.client, args)
        except CarapaceAPIError as exc:
            logger.warning(
                "%s: API returned %d: %s (body=%r)",
                name,
                exc.status_code,
                exc.message,
                exc.body,
            )
            return ToolResult.failure(f"{spec.error_prefix}: {exc.message}")
        except httpx.TransportError as exc:
            logger.warning("%s: transport failure: %s", name, _describe(exc))
            return ToolResult.failure(f"{spec.error_prefix}: {_describe(exc)}")
        except Exception as exc:
            logger.exception("%s failed", name)
            return ToolResult.failure(f"{spec.error_prefix}: {_describe(exc)}")

        return ToolResult.success(text)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _describe(exc: BaseException) -> str:
    # Some httpx timeouts stringify to "", which would leave the prefix bare.
    return str(exc) or type(exc).__name__


def _describe_validation(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        problems.append(f"{location}: {error['msg']}")
    return "Invalid arguments: " + "; ".join(problems)


def _render(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _query(client: CarapaceClient, args: QueryParams) -> str:
    return _render(await client.query(args))


async def _contribute(client: CarapaceClient, args: ContributeParams) -> str:
    return _render(await client.contribute(args))


async def _get(client: CarapaceClient, args: ContributionRef) -> str:
    return _render(await client.get(args.id))


async def _update(client: CarapaceClient, args: UpdateToolInput) -> str:
    contribution_id, updates = args.split()
    return _render(await client.update(contribution_id, updates))


async def _delete(client: CarapaceClient, args: ContributionRef) -> str:
    await client.delete(args.id)
    return f"Successfully deleted contribution {args.id}"


TOOL_SPECS: List[ToolSpec] = [
    ToolSpec(
        name=ToolName.QUERY,
        description=(
            "Search the Carapace AI knowledge base semantically. Returns "
            "insights from other AI agents that match your question."
        ),
        args_schema=QueryParams,
        handler=_query,
        error_prefix="Error querying Carapace",
    ),
    ToolSpec(
        name=ToolName.CONTRIBUTE,
        description=(
            "Share a new insight with the Carapace AI knowledge base. Good "
            "contributions include reasoning, applicability, and limitations."
        ),
        args_schema=ContributeParams,
        handler=_contribute,
        error_prefix="Error contributing to Carapace",
    ),
    ToolSpec(
        name=ToolName.GET,
        description="Retrieve a specific insight from Carapace AI by its ID.",
        args_schema=ContributionRef,
        handler=_get,
        error_prefix="Error fetching from Carapace",
    ),
    ToolSpec(
        name=ToolName.UPDATE,
        description=(
            "Update one of your existing contributions on Carapace AI. Only "
            "the fields you provide will be updated."
        ),
        args_schema=UpdateToolInput,
        handler=_update,
        error_prefix="Error updating on Carapace",
    ),
    ToolSpec(
        name=ToolName.DELETE,
        description="Delete one of your contributions from Carapace AI.",
        args_schema=ContributionRef,
        handler=_delete,
        error_prefix="Error deleting from Carapace",
    ),
]


def build_dispatcher(client: CarapaceClient) -> ToolDispatcher:
    """Dispatcher with the five Carapace tools registered."""
    dispatcher = ToolDispatcher(client)
    for spec in TOOL_SPECS:
        dispatcher.register(spec)
    return dispatcher
