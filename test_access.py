"""Tests de la evaluación de reglas de acceso."""

from datetime import timedelta

import pytest

from perfume_catalog.api.access import (
    ADMIN_ONLY,
    ANY_USER,
    AccessOutcome,
    Public,
    RequiresAnyOf,
    evaluate_access,
    extract_bearer_token,
)


@pytest.mark.parametrize(
    "header, expected",
    [
        (None, None),
        ("", None),
        ("Basic dXNlcjpwYXNz", None),
        ("Bearer ", None),
        ("bearer abc", None),
        ("Bearer abc.def.ghi", "abc.def.ghi"),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


def test_public_rule_ignores_the_header(token_service):
    decision = evaluate_access(Public(), "Bearer not-a-token", token_service)

    assert decision.outcome is AccessOutcome.PUBLIC
    assert decision.allowed
    assert decision.claims is None


def test_missing_header_is_unauthenticated(token_service):
    decision = evaluate_access(ANY_USER, None, token_service)

    assert decision.outcome is AccessOutcome.UNAUTHENTICATED
    assert not decision.allowed


def test_invalid_token(token_service):
    decision = evaluate_access(ANY_USER, "Bearer abc.def.ghi", token_service)

    assert decision.outcome is AccessOutcome.INVALID_TOKEN


def test_expired_token_is_invalid(token_service, clock):
    token = token_service.issue_token("alice", ["ADMIN"])
    clock.now = clock.now + timedelta(days=2)

    decision = evaluate_access(ADMIN_ONLY, f"Bearer {token}", token_service)

    assert decision.outcome is AccessOutcome.INVALID_TOKEN


def test_user_is_denied_on_admin_rule(token_service):
    token = token_service.issue_token("bob", ["USER"])

    decision = evaluate_access(ADMIN_ONLY, f"Bearer {token}", token_service)

    assert decision.outcome is AccessOutcome.ROLE_DENIED
    assert decision.claims.username == "bob"
    assert not decision.allowed


def test_any_shared_role_matches(token_service):
    token = token_service.issue_token("carol", ["USER"])

    decision = evaluate_access(ANY_USER, f"Bearer {token}", token_service)

    assert decision.outcome is AccessOutcome.ROLE_MATCHED
    assert decision.allowed


def test_token_without_roles_is_denied(token_service):
    token = token_service.issue_token("nobody", [])

    decision = evaluate_access(RequiresAnyOf(frozenset({"USER"})), f"Bearer {token}", token_service)

    assert decision.outcome is AccessOutcome.ROLE_DENIED
