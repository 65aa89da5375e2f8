# uiauto_elements/extensions.py
"""
@file extensions.py
@brief Built-in behaviors: naming, matcher assertions and matcher waits.

Each behavior is an enricher and/or handler plus a ready-made marker:

    described      records the element name under "description"
    name_provider  handles name() by reading "description" back
    should_match   captures the matcher and asserts it once
    wait_for       captures the matcher and polls it until timeout
"""

from __future__ import annotations

from typing import Any, Optional

from hamcrest.core.helpers.wrap_matcher import wrap_matcher
from hamcrest.core.matcher import Matcher
from hamcrest.core.string_description import StringDescription

from .config import TimeConfig
from .context import InvocationContext
from .exceptions import AssertionMismatch, MissingContext
from .interfaces import ContextEnricher, MethodHandler, Refreshable
from .markers import behavior
from .waits import wait_for_match

DESCRIPTION_KEY = "description"
NAME_MEMBER = "name"
MATCHER_KEY = "matcher"
TIMEOUT_KEY = "timeout"


class DescriptionProvider(ContextEnricher, MethodHandler[str]):
    """
    Resolves the human-readable name of an element.

    The name is the declared name the proxy was created under, falling back
    to the name of the naming member (HasName.name). It never depends on the
    element's live state, so repeated calls agree, and should() or
    wait_until() on the same proxy report the name that name() returns.
    """

    def enrich(self, context: InvocationContext) -> None:
        context.store.put(DESCRIPTION_KEY, resolve_name(context))

    def handle(self, context: InvocationContext, proxy: Any) -> str:
        try:
            return context.store.get(DESCRIPTION_KEY, str)
        except MissingContext as e:
            raise MissingContext(
                DESCRIPTION_KEY,
                expected_type=str,
                actual_type=e.actual_type,
                method=context.method.qualified_name,
                message="no description available",
            ) from e


class MatcherArgument(ContextEnricher):
    """Records the 'matcher' and optional 'timeout' call arguments."""

    def enrich(self, context: InvocationContext) -> None:
        matcher = context.argument("matcher")
        if matcher is None:
            raise TypeError(f"{context.method.qualified_name}() requires a matcher")
        context.store.put(MATCHER_KEY, wrap_matcher(matcher))

        timeout = context.argument("timeout")
        if timeout is not None:
            context.store.put(TIMEOUT_KEY, float(timeout))


class ShouldMatchHandler(MethodHandler[Any]):
    """Evaluates the captured matcher once against the proxy."""

    def handle(self, context: InvocationContext, proxy: Any) -> Any:
        matcher = context.store.get(MATCHER_KEY, Matcher)
        _refresh(proxy)

        mismatch = StringDescription()
        if matcher.matches(proxy, mismatch):
            return proxy

        raise AssertionMismatch(
            element_name=element_name(context),
            expected=describe(matcher),
            mismatch=str(mismatch),
            method=context.method.qualified_name,
        )


class WaitUntilHandler(MethodHandler[Any]):
    """
    Polls the captured matcher against the proxy until it holds.

    Uses the 'collection_wait' settings for refreshable collections and
    'element_wait' otherwise; a 'timeout' call argument wins over both.
    """

    def handle(self, context: InvocationContext, proxy: Any) -> Any:
        matcher = context.store.get(MATCHER_KEY, Matcher)
        kind = "collection_wait" if isinstance(proxy, Refreshable) else "element_wait"
        settings = TimeConfig.current().settings_for(kind)
        timeout = context.store.find(TIMEOUT_KEY, float)
        if timeout is None:
            timeout = settings.timeout

        name = element_name(context)
        expected = describe(matcher)

        def probe():
            _refresh(proxy)
            mismatch = StringDescription()
            if matcher.matches(proxy, mismatch):
                return True, ""
            return False, str(mismatch)

        wait_for_match(
            probe,
            timeout=timeout,
            interval=settings.interval,
            description=f"'{name}' to match {expected}",
            stage=context.method.name,
            element_name=name,
            expected=expected,
        )
        return proxy


def resolve_name(context: InvocationContext) -> str:
    """Name the naming capability reports for the proxy that received the call."""
    return context.origin or NAME_MEMBER


def element_name(context: InvocationContext) -> str:
    """Recorded element name, resolved directly when no enricher recorded it."""
    name: Optional[str] = context.store.find(DESCRIPTION_KEY, str)
    return name or resolve_name(context)


def describe(matcher: Matcher) -> str:
    description = StringDescription()
    description.append_description_of(matcher)
    return str(description)


def _refresh(proxy: Any) -> None:
    if isinstance(proxy, Refreshable):
        proxy.refresh()


described = behavior(enrichers=(DescriptionProvider,), label="described")
name_provider = behavior(handler=DescriptionProvider, enrichers=(DescriptionProvider,), label="name")
should_match = behavior(handler=ShouldMatchHandler, enrichers=(MatcherArgument,), label="should")
wait_for = behavior(handler=WaitUntilHandler, enrichers=(MatcherArgument,), label="wait_until")
