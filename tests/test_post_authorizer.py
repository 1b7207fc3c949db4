from datetime import datetime, timedelta, timezone

import pytest

from anecdotes.core.exceptions import NotOwnerError, WindowExpiredError
from anecdotes.services.posts import Decision, PostAuthorizer

from conftest import FakePost

T = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
ALICE, BOB = 1, 2


@pytest.fixture()
def authorizer() -> PostAuthorizer:
    return PostAuthorizer(edit_window=timedelta(minutes=30))


@pytest.fixture()
def post() -> FakePost:
    return FakePost(id=1, user_id=ALICE, title="t", content="c", created_at=T, updated_at=T)


def test_write_allowed_just_inside_window(authorizer, post):
    now = T + timedelta(minutes=29, seconds=59)
    assert authorizer.authorize_write(post, ALICE, now) is Decision.ALLOW


def test_write_denied_just_outside_window(authorizer, post):
    now = T + timedelta(minutes=30, seconds=1)
    assert authorizer.authorize_write(post, ALICE, now) is Decision.WINDOW_EXPIRED


def test_exact_boundary_is_locked(authorizer, post):
    now = T + timedelta(minutes=30)
    assert not authorizer.can_modify(post, now)
    assert authorizer.authorize_write(post, ALICE, now) is Decision.WINDOW_EXPIRED


@pytest.mark.parametrize("elapsed", [timedelta(0), timedelta(minutes=10), timedelta(hours=5)])
def test_non_owner_denied_regardless_of_window(authorizer, post, elapsed):
    assert authorizer.authorize_write(post, BOB, T + elapsed) is Decision.NOT_OWNER
    assert authorizer.authorize_read(post, BOB) is Decision.NOT_OWNER


def test_owner_can_always_read(authorizer, post):
    assert authorizer.authorize_read(post, ALICE) is Decision.ALLOW


def test_editing_does_not_extend_window(authorizer, post):
    post.updated_at = T + timedelta(minutes=25)
    now = T + timedelta(minutes=31)
    assert authorizer.authorize_write(post, ALICE, now) is Decision.WINDOW_EXPIRED


def test_naive_created_at_is_treated_as_utc(authorizer, post):
    post.created_at = T.replace(tzinfo=None)
    assert authorizer.can_modify(post, T + timedelta(minutes=5))
    assert not authorizer.can_modify(post, T + timedelta(minutes=31))


def test_clock_is_used_when_now_is_omitted(post):
    authorizer = PostAuthorizer(clock=lambda: T + timedelta(minutes=31))
    assert authorizer.authorize_write(post, ALICE) is Decision.WINDOW_EXPIRED


def test_require_write_raises_matching_errors(authorizer, post):
    with pytest.raises(NotOwnerError):
        authorizer.require_write(post, BOB, T)
    with pytest.raises(WindowExpiredError, match="within 30 minutes"):
        authorizer.require_write(post, ALICE, T + timedelta(hours=1))
    authorizer.require_write(post, ALICE, T + timedelta(minutes=1))


def test_require_read_raises_for_non_owner(authorizer, post):
    with pytest.raises(NotOwnerError):
        authorizer.require_read(post, BOB)
