"""Session resolution: decide where an authenticated principal may go.

Each guarded page has an ordered tuple of RedirectRule; the first rule whose
guard matches decides the target, and PROCEED is returned when none match.
Later guards assume earlier ones did not match (e.g. the tenant check runs
only once the user is known to exist).

User lookup is lazy and memoized per resolution: rules that never need the
user (no principal, onboarding flag) do not touch the data store. Lookup
order is cache → principal ID → contact address. A match by contact address
is linked to the principal exactly once per resolution.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from app.application.dtos.session import SessionPrincipal, SessionResolution
from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import IUserRepository
from app.application.interfaces.services import IUserCache
from app.domain.enums import GuardedPage, RedirectTarget, UserStatus
from app.domain.exceptions import AuthenticationException, AuthorizationException
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class ResolutionContext:
    """Per-request lookup state shared by the guards of one resolution."""

    def __init__(
        self,
        principal: SessionPrincipal,
        user_repo: IUserRepository,
        cache: IUserCache,
        *,
        link_by_email: bool,
        use_post_link_status: bool,
    ) -> None:
        self.principal = principal
        self._user_repo = user_repo
        self._cache = cache
        self._link_by_email = link_by_email
        self._use_post_link_status = use_post_link_status
        self._loaded = False
        self._user: UserResult | None = None
        self._user_count: int | None = None
        self.linked = False

    async def user(self) -> UserResult | None:
        """Return the user the decision is based on (loaded once)."""
        if not self._loaded:
            self._user = await self._load_user()
            self._loaded = True
        return self._user

    @property
    def loaded_user(self) -> UserResult | None:
        """User if a guard already loaded it; never triggers a lookup."""
        return self._user

    async def user_count(self) -> int:
        """Return total users in the system (loaded once)."""
        if self._user_count is None:
            self._user_count = await self._user_repo.count()
        return self._user_count

    async def _load_user(self) -> UserResult | None:
        principal_id = self.principal.principal_id
        if principal_id is None:
            return None
        if self._cache.is_valid(principal_id):
            logger.debug("User cache HIT: %s", principal_id)
            return self._cache.get(principal_id).value
        user = await self._user_repo.get_by_principal_id(principal_id)
        if user is not None:
            self._cache.set(principal_id, user)
            return user
        if not self._link_by_email or not self.principal.email:
            return None
        by_email = await self._user_repo.get_by_email(self.principal.email)
        if by_email is None:
            return None
        linked = await self._user_repo.link_principal(by_email.id, principal_id)
        self._cache.invalidate(principal_id)
        self.linked = True
        logger.info(
            "Linked principal %s to existing user %s by contact address (status was %s)",
            principal_id,
            by_email.id,
            by_email.status.value,
        )
        return linked if self._use_post_link_status else by_email


Guard = Callable[[ResolutionContext], Awaitable[bool]]


@dataclass(frozen=True)
class RedirectRule:
    """A named guard and the target it emits when it matches."""

    name: str
    guard: Guard
    target: RedirectTarget


async def _no_principal(ctx: ResolutionContext) -> bool:
    return ctx.principal.principal_id is None


async def _needs_onboarding(ctx: ResolutionContext) -> bool:
    return ctx.principal.public_metadata.needs_onboarding is True


async def _unknown_first_user(ctx: ResolutionContext) -> bool:
    return await ctx.user() is None and await ctx.user_count() == 0


async def _unknown_user(ctx: ResolutionContext) -> bool:
    return await ctx.user() is None


async def _invited(ctx: ResolutionContext) -> bool:
    user = await ctx.user()
    return user is not None and user.status == UserStatus.INVITED


async def _no_tenant(ctx: ResolutionContext) -> bool:
    user = await ctx.user()
    return user is not None and user.tenant_id is None


async def _setup_incomplete(ctx: ResolutionContext) -> bool:
    user = await ctx.user()
    return user is not None and user.role.is_elevated and not user.job_title


async def _onboarded(ctx: ResolutionContext) -> bool:
    user = await ctx.user()
    return user is not None and user.tenant_id is not None


async def _member_with_tenant(ctx: ResolutionContext) -> bool:
    user = await ctx.user()
    return (
        user is not None and user.tenant_id is not None and not user.role.is_elevated
    )


async def _setup_done(ctx: ResolutionContext) -> bool:
    user = await ctx.user()
    return (
        user is not None
        and user.tenant_id is not None
        and user.role.is_elevated
        and bool(user.job_title)
    )


DASHBOARD_RULES: tuple[RedirectRule, ...] = (
    RedirectRule("no_principal", _no_principal, RedirectTarget.SIGN_IN),
    RedirectRule("needs_onboarding", _needs_onboarding, RedirectTarget.WELCOME),
    RedirectRule("first_user", _unknown_first_user, RedirectTarget.SETUP),
    RedirectRule("unknown_user", _unknown_user, RedirectTarget.WELCOME),
    RedirectRule("invited", _invited, RedirectTarget.AWAITING_INVITE),
    RedirectRule("no_tenant", _no_tenant, RedirectTarget.WELCOME),
    RedirectRule("setup_incomplete", _setup_incomplete, RedirectTarget.SETUP),
)

WELCOME_RULES: tuple[RedirectRule, ...] = (
    RedirectRule("no_principal", _no_principal, RedirectTarget.SIGN_IN),
    RedirectRule("invited", _invited, RedirectTarget.AWAITING_INVITE),
    RedirectRule("onboarded", _onboarded, RedirectTarget.DASHBOARD),
)

SETUP_RULES: tuple[RedirectRule, ...] = (
    RedirectRule("no_principal", _no_principal, RedirectTarget.SIGN_IN),
    RedirectRule("member_with_tenant", _member_with_tenant, RedirectTarget.DASHBOARD),
    RedirectRule("setup_done", _setup_done, RedirectTarget.DASHBOARD),
)

PAGE_RULES: dict[GuardedPage, tuple[RedirectRule, ...]] = {
    GuardedPage.DASHBOARD: DASHBOARD_RULES,
    GuardedPage.WELCOME: WELCOME_RULES,
    GuardedPage.SETUP: SETUP_RULES,
}

# Pages whose layouts link an unknown principal to an invite by contact address.
_LINKING_PAGES = frozenset({GuardedPage.DASHBOARD, GuardedPage.SETUP})

PROCEED_RULE = "proceed"


class SessionResolver:
    """Evaluate a page's redirect rules for a principal.

    Data-store errors propagate to the caller; nothing is retried.
    """

    def __init__(
        self,
        user_repo: IUserRepository,
        cache: IUserCache,
        *,
        use_post_link_status: bool = False,
    ) -> None:
        """Initialize resolver.

        Args:
            user_repo: User lookups, link and count.
            cache: Process-wide principal → user snapshot cache.
            use_post_link_status: When True, a user linked by contact address
                is judged by its post-link (ACTIVE) status instead of the
                status it had when found.
        """
        self._user_repo = user_repo
        self._cache = cache
        self._use_post_link_status = use_post_link_status

    @traced("session.resolve")
    async def resolve(
        self,
        principal: SessionPrincipal,
        page: GuardedPage = GuardedPage.DASHBOARD,
    ) -> SessionResolution:
        """Return the routing decision for principal on page."""
        ctx = ResolutionContext(
            principal,
            self._user_repo,
            self._cache,
            link_by_email=page in _LINKING_PAGES,
            use_post_link_status=self._use_post_link_status,
        )
        for rule in PAGE_RULES[page]:
            if await rule.guard(ctx):
                return await self._decide(ctx, page, rule.name, rule.target)
        return await self._decide(ctx, page, PROCEED_RULE, RedirectTarget.PROCEED)

    async def _decide(
        self,
        ctx: ResolutionContext,
        page: GuardedPage,
        rule: str,
        target: RedirectTarget,
    ) -> SessionResolution:
        add_span_attributes(
            **{"session.page": page.value, "session.rule": rule, "session.target": target.value}
        )
        logger.debug(
            "Session resolved: page=%s principal=%s rule=%s target=%s",
            page.value,
            ctx.principal.principal_id,
            rule,
            target.value,
        )
        return SessionResolution(
            target=target, rule=rule, user=ctx.loaded_user, linked=ctx.linked
        )

    async def current_user(self, principal: SessionPrincipal) -> UserResult:
        """Return the active user behind principal for protected API operations.

        Same cache-first lookup as resolve(), without linking by contact address.

        Raises:
            AuthenticationException: If there is no principal.
            AuthorizationException: If no user is linked or the user is still invited.
        """
        principal_id = principal.principal_id
        if principal_id is None:
            raise AuthenticationException("Login required")
        ctx = ResolutionContext(
            principal,
            self._user_repo,
            self._cache,
            link_by_email=False,
            use_post_link_status=self._use_post_link_status,
        )
        user = await ctx.user()
        if user is None:
            raise AuthorizationException(message="No user is linked to this session")
        if user.status == UserStatus.INVITED:
            raise AuthorizationException(message="Invitation not yet accepted")
        return user
