from typing import Dict

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from media_service.services import analytics
from shared.db.models import Media, MediaLike, Withdrawal, WithdrawalStatus
from tests.utils.assertions import assert_envelope, assert_error
from tests.utils.factories import AsyncTestDataFactory


async def create_media(
    client: AsyncClient, headers: Dict[str, str], **overrides
) -> Dict:
    response = await client.post(
        "/api/v1/media",
        json=AsyncTestDataFactory.create_media_data(**overrides),
        headers=headers,
    )
    return assert_envelope(response, 201)


async def purchase(client: AsyncClient, media_id: str, headers: Dict[str, str]):
    return await client.post(
        f"/api/v1/analytics/media/{media_id}/purchase", headers=headers
    )


async def withdraw(client: AsyncClient, amount: str, headers: Dict[str, str]):
    return await client.post(
        "/api/v1/analytics/withdrawal",
        json={
            "amount": amount,
            "account_details": {"bank": "NIC Asia", "account": "0012345678"},
        },
        headers=headers,
    )


async def test_like_toggles(
    test_client: AsyncClient,
    user_headers: Dict[str, str],
    other_user_headers: Dict[str, str],
):
    media = await create_media(test_client, user_headers)
    url = f"/api/v1/analytics/media/{media['id']}/like"

    liked = await test_client.post(url, headers=other_user_headers)
    assert assert_envelope(liked, 200) == {"liked": True, "likes": 1}
    assert liked.json()["message"] == "Media liked"

    unliked = await test_client.post(url, headers=other_user_headers)
    assert assert_envelope(unliked, 200) == {"liked": False, "likes": 0}
    assert unliked.json()["message"] == "Media unliked"


async def test_like_missing_media_returns_404(
    test_client: AsyncClient, user_headers: Dict[str, str]
):
    response = await test_client.post(
        "/api/v1/analytics/media/nope00/like", headers=user_headers
    )

    assert_error(response, 404, "Media not found")


async def test_like_losing_a_race_returns_conflict(
    test_client: AsyncClient,
    test_db_session: AsyncSession,
    user_headers: Dict[str, str],
    other_user_headers: Dict[str, str],
    monkeypatch: pytest.MonkeyPatch,
):
    media = await create_media(test_client, user_headers)
    url = f"/api/v1/analytics/media/{media['id']}/like"
    assert_envelope(await test_client.post(url, headers=other_user_headers), 200)

    # A second request that looked before the first one committed
    async def no_like_yet(db, media_id, user_id):
        return None

    monkeypatch.setattr(analytics, "find_media_like", no_like_yet)
    response = await test_client.post(url, headers=other_user_headers)

    assert_error(response, 409, "Media already liked")
    likes = await test_db_session.scalar(
        select(func.count())
        .select_from(MediaLike)
        .where(MediaLike.media_id == media["id"])
    )
    assert likes == 1
    stored = await test_db_session.scalar(
        select(Media.likes).where(Media.id == media["id"])
    )
    assert stored == 1


async def test_purchase_credits_the_uploader(
    test_client: AsyncClient,
    user,
    other_user,
    user_headers: Dict[str, str],
    other_user_headers: Dict[str, str],
):
    media = await create_media(test_client, user_headers, price="500.00")

    response = await purchase(test_client, media["id"], other_user_headers)

    sale = assert_envelope(response, 201)
    assert sale["amount"] == 500.0
    assert sale["buyer_id"] == other_user.id
    assert sale["seller_id"] == user.id
    assert sale["status"] == "COMPLETED"

    detail = await test_client.get(f"/api/v1/media/{media['id']}")
    counters = assert_envelope(detail, 200)
    assert counters["sales"] == 1
    assert counters["total_earnings"] == 500.0


async def test_free_or_inactive_media_cannot_be_purchased(
    test_client: AsyncClient,
    user_headers: Dict[str, str],
    other_user_headers: Dict[str, str],
):
    free = await create_media(test_client, user_headers, price="0")
    hidden = await create_media(test_client, user_headers, price="100.00")
    await test_client.put(
        f"/api/v1/media/{hidden['id']}",
        json={"is_active": False},
        headers=user_headers,
    )

    for media_id in (free["id"], hidden["id"], "nope00"):
        response = await purchase(test_client, media_id, other_user_headers)
        assert_error(response, 404, "Media not available for purchase")


async def test_withdrawal_limited_by_available_balance(
    test_client: AsyncClient,
    test_db_session: AsyncSession,
    user,
    user_headers: Dict[str, str],
    other_user_headers: Dict[str, str],
):
    media = await create_media(test_client, user_headers, price="500.00")
    await purchase(test_client, media["id"], other_user_headers)

    first = await withdraw(test_client, "300.00", user_headers)
    withdrawal = assert_envelope(first, 201)
    assert withdrawal["status"] == "PENDING"
    assert withdrawal["amount"] == 300.0
    assert "account_details" not in withdrawal

    # The pending 300 is already reserved
    second = await withdraw(test_client, "300.00", user_headers)
    assert_error(second, 400, "Insufficient balance")
    assert second.json()["details"]["available_balance"] == "200.00"

    stored = (
        await test_db_session.execute(
            select(Withdrawal).where(Withdrawal.user_id == user.id)
        )
    ).scalars().all()
    assert len(stored) == 1


async def test_rejected_withdrawal_releases_balance(
    test_client: AsyncClient,
    test_db_session: AsyncSession,
    user_headers: Dict[str, str],
    other_user_headers: Dict[str, str],
):
    media = await create_media(test_client, user_headers, price="500.00")
    await purchase(test_client, media["id"], other_user_headers)
    withdrawal = assert_envelope(
        await withdraw(test_client, "500.00", user_headers), 201
    )

    row = await test_db_session.get(Withdrawal, withdrawal["id"])
    row.status = WithdrawalStatus.REJECTED
    await test_db_session.commit()

    earnings = await test_client.get("/api/v1/analytics/earnings", headers=user_headers)
    assert assert_envelope(earnings, 200)["available_balance"] == 500.0


async def test_withdrawal_rejects_non_positive_amount(
    test_client: AsyncClient, user_headers: Dict[str, str]
):
    for amount in ("0", "-10.00"):
        response = await withdraw(test_client, amount, user_headers)
        assert_error(response, 400, "Invalid amount")


async def test_withdrawal_without_earnings_is_rejected(
    test_client: AsyncClient, user_headers: Dict[str, str]
):
    response = await withdraw(test_client, "1.00", user_headers)

    assert_error(response, 400, "Insufficient balance")


async def test_earnings_summary(
    test_client: AsyncClient,
    user_headers: Dict[str, str],
    other_user_headers: Dict[str, str],
):
    media = await create_media(test_client, user_headers, price="250.00")
    await purchase(test_client, media["id"], other_user_headers)
    await purchase(test_client, media["id"], other_user_headers)
    await withdraw(test_client, "100.00", user_headers)

    response = await test_client.get("/api/v1/analytics/earnings", headers=user_headers)

    earnings = assert_envelope(response, 200)
    assert earnings["total_earnings"] == 500.0
    assert earnings["total_sales"] == 2
    assert earnings["total_withdrawn"] == 0.0
    assert earnings["pending_withdrawals"] == 100.0
    assert earnings["available_balance"] == 400.0
    assert len(earnings["sales"]) == 2
    assert len(earnings["withdrawals"]) == 1


async def test_user_analytics_dashboard(
    test_client: AsyncClient,
    user_headers: Dict[str, str],
    other_user_headers: Dict[str, str],
):
    sold = await create_media(
        test_client, user_headers, price="300.00", title="Golden hour"
    )
    await create_media(test_client, user_headers, category="HOW_IT_WORKS")
    await purchase(test_client, sold["id"], other_user_headers)
    await test_client.post(
        f"/api/v1/analytics/media/{sold['id']}/like", headers=other_user_headers
    )

    response = await test_client.get("/api/v1/analytics/user", headers=user_headers)

    data = assert_envelope(response, 200)
    overview = data["overview"]
    assert overview["total_images"] == 2
    assert overview["total_likes"] == 1
    assert overview["total_sales"] == 1
    assert overview["total_earnings"] == 300.0
    assert overview["average_earnings_per_image"] == 150.0
    assert len(data["monthly_earnings"]) == 12
    assert data["monthly_earnings"][-1]["earnings"] == 300.0
    assert data["recent_sales"][0]["media_title"] == "Golden hour"
    categories = {row["category"]: row["count"] for row in data["category_breakdown"]}
    assert categories == {"GALLERY": 1, "HOW_IT_WORKS": 1}
    assert len(data["media"]) == 2


async def test_media_analytics_is_owner_only(
    test_client: AsyncClient,
    user_headers: Dict[str, str],
    other_user_headers: Dict[str, str],
):
    media = await create_media(test_client, user_headers, price="50.00")
    await purchase(test_client, media["id"], other_user_headers)
    await test_client.post(
        f"/api/v1/analytics/media/{media['id']}/like", headers=other_user_headers
    )
    url = f"/api/v1/analytics/media/{media['id']}"

    denied = await test_client.get(url, headers=other_user_headers)
    assert_error(denied, 404, "Media not found")

    allowed = await test_client.get(url, headers=user_headers)
    data = assert_envelope(allowed, 200)
    assert data["media"]["id"] == media["id"]
    assert len(data["likes"]) == 1
    assert len(data["sales"]) == 1


async def test_analytics_require_authentication(test_client: AsyncClient):
    response = await test_client.get("/api/v1/analytics/earnings")

    assert_error(response, 401)
