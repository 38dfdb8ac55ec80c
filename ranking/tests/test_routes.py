"""
API tests for the ranking router (FastAPI TestClient, SQLite backend).
"""

from datetime import timedelta

import pytest

from sqlalchemy.exc import OperationalError

import ranking.routes as routes

from factories import NOW

PREFIX = "/admin/dashboard"


def test_health(client):
    response = client.get(f"{PREFIX}/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_top_influencers_camel_case_round_trip(client, seed):
    fashion = seed.niche("Fashion")
    star = seed.influencer("star", niches=[fashion], is_verified=True,
                           collaboration_costs={"instagram": {"post": 1500}})
    seed.followers(star, 3)
    seed.influencer("quiet")
    fashion_id = fashion.id
    seed.commit()

    response = client.post(f"{PREFIX}/top-influencers", json={
        "nicheIds": [fashion_id],
        "minBudget": 1000,
        "maxBudget": 2000,
        "limit": 5,
    })
    assert response.status_code == 200

    body = response.json()
    assert body["total"] == 2
    assert body["totalPages"] == 1
    assert body["hasNext"] is False
    assert body["appliedWeights"]["nicheMatchWeight"] == 30.0

    top = body["items"][0]
    assert top["username"] == "star"
    assert top["niches"] == ["Fashion"]
    assert top["followersCount"] == 3
    assert top["scoreBreakdown"]["nicheMatchScore"] == 100.0
    assert top["scoreBreakdown"]["collaborationChargesScore"] == 100.0
    # No posts: neutral engagement score 50, reported as 50 / 10
    assert top["engagementRate"] == 5.0
    # 100*30 + 50*25 + 40*15 + 100*15 + 50*10 + 100*5 = 7350
    assert top["scoreBreakdown"]["overallScore"] == 73.5
    assert top["scoreBreakdown"]["recommendationLevel"] == "recommended"
    assert body["items"][1]["scoreBreakdown"]["overallScore"] == 50.0


def test_comma_separated_ids_are_accepted(client, seed):
    pune = seed.city("Pune")
    goa = seed.city("Goa")
    seed.influencer("local", city_id=pune.id)
    seed.influencer("remote", city_id=goa.id)
    pune_id = pune.id
    seed.commit()

    response = client.post(f"{PREFIX}/top-influencers", json={"cityIds": f"{pune_id}, 999"})
    assert response.status_code == 200
    assert [item["username"] for item in response.json()["items"]] == ["local"]


@pytest.mark.parametrize("field, value", [
    ("cityIds", "abc"),
    ("cityIds", "3, x"),
    ("nicheIds", ["1", "two"]),
])
def test_malformed_id_list_rejected(client, field, value):
    response = client.post(f"{PREFIX}/top-influencers", json={field: value})
    assert response.status_code == 422
    assert any(field in error["loc"] for error in response.json()["detail"])


def test_invalid_limit_names_the_field(client):
    response = client.post(f"{PREFIX}/top-influencers", json={"limit": 0})
    assert response.status_code == 422
    locations = [error["loc"] for error in response.json()["detail"]]
    assert any("limit" in loc for loc in locations)


def test_weight_out_of_range_rejected(client):
    response = client.post(f"{PREFIX}/top-influencers", json={"nicheMatchWeight": 150})
    assert response.status_code == 422
    assert any("nicheMatchWeight" in error["loc"] for error in response.json()["detail"])


def test_influencer_listing_requires_profile_filter(client):
    response = client.post(f"{PREFIX}/influencers", json={})
    assert response.status_code == 422
    assert any("profileFilter" in error["loc"] for error in response.json()["detail"])


def test_influencer_listing_sorted_by_followers(client, seed):
    small = seed.influencer("small")
    big = seed.influencer("big")
    seed.followers(small, 1)
    seed.followers(big, 6)
    seed.commit()

    response = client.post(f"{PREFIX}/influencers", json={
        "profileFilter": "allProfile",
        "sortBy": "followers",
    })
    assert response.status_code == 200
    items = response.json()["items"]
    assert [item["username"] for item in items] == ["big", "small"]
    assert items[0]["scoreBreakdown"]["overallScore"] == 0.0
    assert items[0]["engagementRate"] == 0.0
    assert set(response.json()["appliedWeights"].values()) == {0.0}


def test_top_brands(client, seed):
    acme = seed.brand("acme")
    solo = seed.brand("solo")
    for name, niches in (("One", [1]), ("Two", [2])):
        campaign = seed.campaign(acme, name, niche_ids=niches)
        seed.deliverable(campaign, 2000)
        seed.applications(campaign, 2, selected=1)
    seed.applications(seed.campaign(solo, "Only", niche_ids=[1, 2]), 1, selected=1)
    seed.commit()

    response = client.post(f"{PREFIX}/top-brands", json={"sortBy": "composite"})
    assert response.status_code == 200

    body = response.json()
    assert body["sortBy"] == "composite"
    assert body["timeframe"] == "all"
    assert [item["username"] for item in body["items"]] == ["acme"]
    metrics = body["items"][0]["metrics"]
    assert metrics["totalCampaigns"] == 2
    assert metrics["averagePayout"] == 2000.0
    assert metrics["compositeScore"] == 100.0


def test_brand_listing(client, seed):
    seed.brand("older", created_at=NOW - timedelta(days=30))
    seed.brand("newer", is_verified=False, created_at=NOW - timedelta(days=3))
    seed.commit()

    response = client.post(f"{PREFIX}/brands", json={"profileFilter": "allProfile"})
    assert response.status_code == 200
    assert [item["username"] for item in response.json()["items"]] == ["older", "newer"]


def test_top_campaigns(client, seed):
    brand = seed.brand("acme")
    strong = seed.campaign(brand, "Strong", status="completed")
    seed.applications(strong, 5, selected=2)
    seed.deliverable(strong, 5000)
    weak = seed.campaign(brand, "Weak")
    seed.applications(weak, 2)
    seed.deliverable(weak, 100)
    seed.commit()

    response = client.post(f"{PREFIX}/top-campaigns", json={"status": "all", "limit": 3})
    assert response.status_code == 200

    body = response.json()
    assert body["statusFilter"] == "all"
    assert [item["name"] for item in body["items"]] == ["Strong"]
    metrics = body["items"][0]["metrics"]
    assert metrics["application"]["applicationsCount"] == 5
    assert metrics["application"]["conversionRate"] == 40.0
    assert metrics["engagement"]["completionRate"] == 100.0
    assert metrics["budget"]["totalBudget"] == 5000.0


def test_database_failure_returns_503(client, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(routes, "run_top_brands", broken)
    response = client.post(f"{PREFIX}/top-brands", json={})
    assert response.status_code == 503
    assert "error" in response.json()


def test_unexpected_failure_returns_500(client, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(routes, "run_top_campaigns", broken)
    response = client.post(f"{PREFIX}/top-campaigns", json={})
    assert response.status_code == 500
    assert response.json()["error"] == "boom"
