"""Ledger Routes — ETH price, conversion, governance votes, identity proof.

Invariants:
    - eth-price: first healthy provider wins; all down → fallback estimate, still 200
    - convert: price APIs down → fixed fallback rates; unsupported currency → 400
    - proposals: votes only on active proposals; unknown → 404
    - verify-zkp: missing → 400, malformed hash → 400, demo record → proof
"""

from skillbridge.core.identity_proof import build_proof

BINANCE = "api.binance.com"
COINGECKO = "api.coingecko.com"

IMAGE_HASH = "a" * 64


# ─── ETH price ────────────────────────────────────────────────────

async def test_eth_price_from_first_provider(client, price_responses):
    price_responses[COINGECKO] = {"ethereum": {"usd": 3500.5, "usd_24h_change": 1.2}}
    price_responses[BINANCE] = {"lastPrice": "1.0", "priceChangePercent": "0"}

    res = await client.get("/api/v1/blockchain/eth-price")

    assert res.status_code == 200
    body = res.json()
    assert body["price"] == 3500.5
    assert body["source"] == "CoinGecko"
    assert body["isEstimate"] is False
    assert res.headers["cache-control"] == "s-maxage=60, stale-while-revalidate=300"


async def test_eth_price_skips_failed_provider(client, price_responses, price_requests):
    price_responses[COINGECKO] = 429
    price_responses[BINANCE] = {"lastPrice": "3321.10", "priceChangePercent": "-2.5"}

    res = await client.get("/api/v1/blockchain/eth-price")

    body = res.json()
    assert body["source"] == "Binance"
    assert body["change24h"] == -2.5
    assert [r.url.host for r in price_requests] == [COINGECKO, BINANCE]


async def test_eth_price_all_providers_down_returns_estimate(client):
    res = await client.get("/api/v1/blockchain/eth-price")

    assert res.status_code == 200
    body = res.json()
    assert body["price"] == 3150.42
    assert body["source"] == "Fallback"
    assert body["isEstimate"] is True


# ─── Conversion ───────────────────────────────────────────────────

async def test_convert_uses_fallback_rates_when_offline(client):
    res = await client.get(
        "/api/v1/blockchain/convert", params={"amount": 2, "from": "ETH", "to": "INR"},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["rates"] == {"ETH_USD": 3150.42, "USD_INR": 83.12}
    assert body["result"] == 2 * 3150.42 * 83.12
    assert body["formatted"].startswith("₹")


async def test_convert_uses_live_eth_price(client, price_responses):
    price_responses[COINGECKO] = {"ethereum": {"usd": 4000, "usd_24h_change": 0}}

    res = await client.get(
        "/api/v1/blockchain/convert", params={"amount": 8000, "from": "USD", "to": "ETH"},
    )

    assert res.json()["result"] == 2
    assert res.json()["formatted"] == "2.000000 ETH"


async def test_convert_same_currency_is_identity(client):
    res = await client.get(
        "/api/v1/blockchain/convert", params={"amount": 12.5, "from": "USD", "to": "USD"},
    )

    assert res.json()["result"] == 12.5


async def test_convert_unsupported_currency_returns_400(client):
    res = await client.get(
        "/api/v1/blockchain/convert", params={"amount": 1, "from": "BTC", "to": "USD"},
    )

    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "from"


# ─── Governance ───────────────────────────────────────────────────

async def test_list_governance_proposals(client):
    res = await client.get("/api/v1/blockchain/proposals")

    assert res.status_code == 200
    assert [p["id"] for p in res.json()["data"]] == [1, 2, 3, 4]


async def test_get_one_governance_proposal(client):
    res = await client.get("/api/v1/blockchain/proposals", params={"id": 3})

    assert res.json()["data"]["status"] == "completed"


async def test_get_unknown_governance_proposal_returns_404(client):
    res = await client.get("/api/v1/blockchain/proposals", params={"id": 99})

    assert res.status_code == 404


async def test_vote_increments_tally(client):
    res = await client.post(
        "/api/v1/blockchain/proposals",
        json={"proposalId": 1, "vote": "yes", "address": "0xabc"},
    )

    assert res.status_code == 200
    assert res.json()["data"]["votes"] == {"yes": 25, "no": 7}

    res = await client.get("/api/v1/blockchain/proposals", params={"id": 1})
    assert res.json()["data"]["votes"]["yes"] == 25


async def test_vote_on_inactive_proposal_returns_400(client):
    res = await client.post(
        "/api/v1/blockchain/proposals",
        json={"proposalId": 4, "vote": "no", "address": "0xabc"},
    )

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "PROPOSAL_INACTIVE"


async def test_invalid_vote_returns_400(client):
    res = await client.post(
        "/api/v1/blockchain/proposals",
        json={"proposalId": 2, "vote": "maybe", "address": "0xabc"},
    )

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_VOTE"


async def test_vote_missing_address_returns_400(client):
    res = await client.post(
        "/api/v1/blockchain/proposals", json={"proposalId": 2, "vote": "yes"},
    )

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Missing required field: address"


async def test_vote_on_unknown_proposal_returns_404(client):
    res = await client.post(
        "/api/v1/blockchain/proposals",
        json={"proposalId": 42, "vote": "yes", "address": "0xabc"},
    )

    assert res.status_code == 404


# ─── Identity proof ───────────────────────────────────────────────

async def test_verify_demo_identity_returns_proof(client):
    res = await client.post(
        "/api/v1/blockchain/verify-zkp",
        json={"aadharNumber": "1234-5678-9012", "imageHash": IMAGE_HASH},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["proof"] == build_proof("1234-5678-9012", IMAGE_HASH, "zkp-demo-key-12345")
    assert "verifiedAt" in body


async def test_verify_unknown_identity_returns_400(client):
    res = await client.post(
        "/api/v1/blockchain/verify-zkp",
        json={"aadharNumber": "1111-2222-3333", "imageHash": IMAGE_HASH},
    )

    assert res.status_code == 400
    assert res.json() == {
        "success": False,
        "message": "Verification failed. The provided Aadhar doesn't match our records",
    }


async def test_verify_malformed_number_returns_format_message(client):
    res = await client.post(
        "/api/v1/blockchain/verify-zkp",
        json={"aadharNumber": "123456789012", "imageHash": IMAGE_HASH},
    )

    assert res.status_code == 400
    assert res.json()["message"] == "Invalid Aadhar format. Must be XXXX-XXXX-XXXX"


async def test_verify_malformed_hash_returns_400(client):
    res = await client.post(
        "/api/v1/blockchain/verify-zkp",
        json={"aadharNumber": "1234-5678-9012", "imageHash": "not-a-hash"},
    )

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_FIELD"


async def test_verify_missing_hash_returns_400(client):
    res = await client.post(
        "/api/v1/blockchain/verify-zkp", json={"aadharNumber": "1234-5678-9012"},
    )

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Missing required field: imageHash"


async def test_vote_with_zero_proposal_id_counts_as_missing(client):
    res = await client.post(
        "/api/v1/blockchain/proposals",
        json={"proposalId": 0, "vote": "yes", "address": "0xabc"},
    )

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Missing required field: proposalId"
