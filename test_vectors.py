"""
Tests for vector operations and index host discovery.
"""

import asyncio

import httpx
import pytest

from conftest import INDEX_HOST, describe_then
from src.pinecone_api import (
    Failure,
    PineconeValidationError,
    Success,
    delete_all_vectors,
    delete_vectors,
    describe_index_stats,
    fetch_vectors,
    index,
    query,
    upsert_vectors
)
from src.pinecone_api.vectors import index_host


@pytest.mark.asyncio
async def test_describe_index_stats_discovers_host_first(mock_pinecone):
    stats = {"namespaces": {"": {"vectorCount": 3}}, "dimension": 384}
    transport = mock_pinecone(describe_then(httpx.Response(200, json=stats)))

    result = await describe_index_stats(index("foo"))

    assert result == Success(stats)
    assert transport.urls == [
        "https://api.pinecone.io/indexes/foo",
        f"https://{INDEX_HOST}/vectors/describe_index_stats",
    ]
    assert [r.method for r in transport.requests] == ["GET", "GET"]


@pytest.mark.asyncio
async def test_host_is_rediscovered_on_every_call(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={})))
    ref = index("foo")

    await describe_index_stats(ref)
    await describe_index_stats(ref)

    discovery = [url for url in transport.urls if url.startswith("https://api.pinecone.io")]
    assert len(discovery) == 2


@pytest.mark.asyncio
async def test_discovery_failure_is_returned_without_data_plane_call(mock_pinecone):
    transport = mock_pinecone(lambda request: httpx.Response(404, json={"message": "not found"}))

    result = await describe_index_stats(index("missing"))

    assert result == Failure({"message": "not found"})
    assert result.status_code == 404
    assert transport.urls == ["https://api.pinecone.io/indexes/missing"]


@pytest.mark.asyncio
async def test_discovery_transport_failure_propagates(mock_pinecone):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    mock_pinecone(refuse)

    result = await query(index("docs"), [0.1, 0.2])

    assert result.is_transport_error


@pytest.mark.asyncio
async def test_description_without_host_is_a_failure(mock_pinecone):
    transport = mock_pinecone(lambda request: httpx.Response(200, json={"name": "docs", "status": {}}))

    result = await index_host("docs")

    assert isinstance(result, Failure)
    assert "host" in result.payload["message"]
    assert len(transport.requests) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("host", ["bad host/with space:port", "docs.pinecone.io/vectors", "https://docs.pinecone.io/x"])
async def test_malformed_host_is_a_failure(mock_pinecone, host):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={"upsertedCount": 1}), host=host))

    result = await upsert_vectors(index("docs"), [{"id": "a", "values": [0.1]}])

    assert isinstance(result, Failure)
    assert "malformed host" in result.payload["message"]
    assert len(transport.requests) == 1


@pytest.mark.asyncio
async def test_host_with_scheme_and_port_is_accepted(mock_pinecone):
    mock_pinecone(describe_then(httpx.Response(200, json={}), host="https://docs.pinecone.io:443"))

    assert await index_host("docs") == "https://docs.pinecone.io:443"


@pytest.mark.asyncio
async def test_discovery_uses_call_config(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={})))

    await describe_index_stats(index("docs"), config={"api_key": "other"})

    assert [r.headers["api-key"] for r in transport.requests] == ["other", "other"]


@pytest.mark.asyncio
async def test_upsert_vectors(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={"upsertedCount": 2})))
    vectors = [{"id": "a", "values": [0.1, 0.2]}, {"id": "b", "values": [0.3, 0.4], "metadata": {"genre": "drama"}}]

    result = await upsert_vectors(index("docs"), vectors, namespace="films")

    assert result == Success({"upsertedCount": 2})
    assert transport.urls[-1] == f"https://{INDEX_HOST}/vectors/upsert"
    assert transport.requests[-1].method == "POST"
    assert transport.body() == {"vectors": vectors, "namespace": "films"}


@pytest.mark.asyncio
async def test_upsert_single_vector_is_wrapped(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={"upsertedCount": 1})))

    await upsert_vectors(index("docs"), {"id": "a", "values": [0.5]})

    assert transport.body() == {"vectors": [{"id": "a", "values": [0.5]}]}


@pytest.mark.asyncio
async def test_fetch_vectors_repeats_ids_in_order(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={"vectors": {}})))

    await fetch_vectors(index("docs"), ["a", "b"])

    request = transport.requests[-1]
    assert transport.urls[-1] == f"https://{INDEX_HOST}/vectors/fetch"
    assert request.method == "GET"
    assert request.url.params.get_list("ids") == ["a", "b"]
    assert "namespace" not in request.url.params


@pytest.mark.asyncio
async def test_fetch_vectors_with_namespace(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={"vectors": {}})))

    await fetch_vectors(index("docs"), ["a"], namespace="films")

    assert list(transport.requests[-1].url.params.multi_items()) == [("namespace", "films"), ("ids", "a")]


@pytest.mark.asyncio
async def test_delete_vectors_uses_query_parameters(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={})))

    await delete_vectors(index("docs"), ["a", "b"])

    request = transport.requests[-1]
    assert request.method == "DELETE"
    assert transport.urls[-1] == f"https://{INDEX_HOST}/vectors/delete"
    assert request.url.params.get_list("ids") == ["a", "b"]
    assert request.content == b""


@pytest.mark.asyncio
async def test_delete_all_vectors_without_filter(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={})))

    await delete_all_vectors(index("docs"))

    assert transport.urls[-1] == f"https://{INDEX_HOST}/vectors/delete"
    assert transport.requests[-1].method == "POST"
    assert transport.body() == {"deleteAll": True}


@pytest.mark.asyncio
async def test_delete_all_vectors_with_filter_omits_delete_all(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={})))

    await delete_all_vectors(index("docs"), namespace="films", filter={"genre": {"$eq": "drama"}})

    assert transport.body() == {"filter": {"genre": {"$eq": "drama"}}, "namespace": "films"}


@pytest.mark.asyncio
async def test_query_hits_index_root(mock_pinecone):
    matches = {"matches": [{"id": "a", "score": 0.9}], "namespace": ""}
    transport = mock_pinecone(describe_then(httpx.Response(200, json=matches)))

    result = await query(index("docs"), [0.1, 0.2])

    assert result == Success(matches)
    assert transport.urls[-1] == f"https://{INDEX_HOST}/query"
    assert transport.body() == {
        "vector": [0.1, 0.2],
        "topK": 5,
        "includeValues": False,
        "includeMetadata": False,
        "filter": {},
    }


@pytest.mark.asyncio
async def test_query_options_use_camel_case(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={"matches": []})))

    await query(
        index("docs"), [0.1],
        top_k=10,
        include_values=True,
        include_metadata=True,
        namespace="films",
        filter={"year": {"$gte": 2000}}
    )

    assert transport.body() == {
        "vector": [0.1],
        "topK": 10,
        "includeValues": True,
        "includeMetadata": True,
        "filter": {"year": {"$gte": 2000}},
        "namespace": "films",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("kwargs", [
    {"top_k": 0},
    {"top_k": "5"},
    {"include_values": "yes"},
    {"include_metadata": None},
    {"filter": [("year", 2000)]},
    {"namespace": 7},
])
async def test_query_validation_happens_before_any_request(mock_pinecone, kwargs):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={})))

    with pytest.raises(PineconeValidationError):
        await query(index("docs"), [0.1], **kwargs)

    assert transport.requests == []


@pytest.mark.asyncio
async def test_ids_must_be_a_list(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={})))

    with pytest.raises(PineconeValidationError):
        await fetch_vectors(index("docs"), "a")
    with pytest.raises(PineconeValidationError):
        await delete_vectors(index("docs"), "a")

    assert transport.requests == []


@pytest.mark.asyncio
async def test_data_plane_not_found_is_a_failure(mock_pinecone):
    mock_pinecone(describe_then(httpx.Response(404, json={"message": "not found"})))

    assert await fetch_vectors(index("docs"), ["a"]) == Failure({"message": "not found"})
    assert await describe_index_stats(index("docs")) == Failure({"message": "not found"})


@pytest.mark.asyncio
async def test_concurrent_upserts_are_independent(mock_pinecone):
    transport = mock_pinecone(describe_then(httpx.Response(200, json={"upsertedCount": 1})))
    ref = index("docs")

    results = await asyncio.gather(*(
        upsert_vectors(ref, {"id": str(i), "values": [float(i)]}) for i in range(3)
    ))

    assert all(result.ok for result in results)
    assert len(transport.requests) == 6
