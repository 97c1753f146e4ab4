"""API resource tests."""

from falcon.testing import TestClient

from contextvault.domain.entities import SourceRecord

from tests.conftest import FakeUnitOfWork, SequenceEmbedder


def _ingest_note(client: TestClient, source_id: str = "n1", content: str = "Milk and eggs."):
    return client.simulate_post(
        "/v1/context/ingest",
        json={
            "source_type": "note",
            "source_id": source_id,
            "title": "Groceries",
            "content": content,
            "metadata": {"folder_id": "home"},
        },
    )


class TestIngest:
    def test_ingest_inline(self, client: TestClient, fake_uow: FakeUnitOfWork) -> None:
        result = _ingest_note(client)

        assert result.status_code == 200
        assert result.json == {
            "source_type": "note",
            "source_id": "n1",
            "total_chunks": 1,
            "saved": 1,
            "skipped": 0,
        }
        assert fake_uow.chunks.chunks[0].folder_id == "home"

    def test_ingest_defaults_to_document(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/ingest",
            json={"source_id": 3, "title": "Report", "content": "Quarterly numbers."},
        )
        assert result.status_code == 200
        assert result.json["source_type"] == "document"
        assert result.json["source_id"] == "3"

    def test_ingest_missing_field(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/ingest", json={"source_type": "note", "title": "No body"}
        )
        assert result.status_code == 400

    def test_ingest_unknown_source_type(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/ingest",
            json={"source_type": "podcast", "source_id": "p", "title": "T", "content": "c"},
        )
        assert result.status_code == 400
        assert "podcast" in result.json["error"]

    def test_ingest_background_accepted(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/ingest",
            json={
                "source_type": "url",
                "source_id": "u1",
                "title": "Docs",
                "content": "Saved page.",
                "background": True,
            },
        )
        assert result.status_code == 202
        assert result.json["status"] == "scheduled"
        assert result.json["source_id"] == "u1"


class TestRetrieve:
    def test_retrieve_returns_bundle_and_prompts(
        self, client: TestClient, sequence_embedder: SequenceEmbedder
    ) -> None:
        _ingest_note(client)
        sequence_embedder.alias("what to buy", sequence_embedder.vector_for("Milk and eggs."))

        result = client.simulate_post("/v1/context/retrieve", json={"query": "what to buy"})

        assert result.status_code == 200
        body = result.json
        assert body["chunk_count"] == 1
        assert body["context_text"] == "[NOTEBOOK: Groceries]\nMilk and eggs."
        assert body["sources"] == ["note: Groceries"]
        assert body["context_chunks"][0]["metadata"]["source_id"] == "n1"
        assert body["context_chunks"][0]["context_weight"] == 100
        assert body["include_all_sources"] is True
        assert body["folder_filtered"] is False
        assert "User's question: what to buy" in body["prompt"]
        assert "(scope: all available sources)" in body["system_prompt"]

    def test_retrieve_folder_scoped(
        self, client: TestClient, sequence_embedder: SequenceEmbedder
    ) -> None:
        _ingest_note(client)
        sequence_embedder.alias("what to buy", sequence_embedder.vector_for("Milk and eggs."))

        result = client.simulate_post(
            "/v1/context/retrieve",
            json={
                "query": "what to buy",
                "selected_folders": ["work"],
                "include_all_sources": False,
            },
        )

        assert result.status_code == 200
        assert result.json["chunk_count"] == 0
        assert result.json["folder_filtered"] is True
        assert result.json["selected_folders"] == ["work"]

    def test_retrieve_without_context_passes_prompt_through(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/retrieve", json={"query": "hello", "system_prompt": "Be brief."}
        )

        assert result.status_code == 200
        assert result.json["chunk_count"] == 0
        assert result.json["context_text"] == ""
        assert result.json["prompt"] == "hello"
        assert result.json["system_prompt"] == "Be brief."

    def test_retrieve_blank_query(self, client: TestClient) -> None:
        result = client.simulate_post("/v1/context/retrieve", json={"query": "  "})
        assert result.status_code == 400

    def test_retrieve_store_unavailable(
        self, client: TestClient, fake_uow: FakeUnitOfWork
    ) -> None:
        fake_uow.chunks.unreachable = True
        result = client.simulate_post("/v1/context/retrieve", json={"query": "hello"})
        assert result.status_code == 503


class TestQuery:
    def test_query_returns_matches(
        self, client: TestClient, sequence_embedder: SequenceEmbedder
    ) -> None:
        _ingest_note(client)
        sequence_embedder.alias("eggs?", sequence_embedder.vector_for("Milk and eggs."))

        result = client.simulate_post(
            "/v1/context/query", json={"prompt": "eggs?", "source_types": ["note"]}
        )

        assert result.status_code == 200
        assert result.json["success"] is True
        assert [d["content"] for d in result.json["data"]] == ["Milk and eggs."]
        assert result.json["data"][0]["similarity"] == 1.0

    def test_query_other_source_type_empty(
        self, client: TestClient, sequence_embedder: SequenceEmbedder
    ) -> None:
        _ingest_note(client)
        sequence_embedder.alias("eggs?", sequence_embedder.vector_for("Milk and eggs."))

        result = client.simulate_post(
            "/v1/context/query", json={"prompt": "eggs?", "source_types": ["url"]}
        )

        assert result.json == {"success": True, "data": []}

    def test_query_missing_prompt(self, client: TestClient) -> None:
        result = client.simulate_post("/v1/context/query", json={})
        assert result.status_code == 400
        assert result.json["success"] is False


class TestSources:
    def test_delete_source_chunks(self, client: TestClient, fake_uow: FakeUnitOfWork) -> None:
        _ingest_note(client)
        _ingest_note(client, source_id="n2", content="Bread.")

        result = client.simulate_delete("/v1/context/sources/note/n1")

        assert result.status_code == 200
        assert result.json == {"deleted": 1}
        assert [c.source_id for c in fake_uow.chunks.chunks] == ["n2"]

    def test_delete_unknown_type(self, client: TestClient) -> None:
        result = client.simulate_delete("/v1/context/sources/podcast/1")
        assert result.status_code == 400


class TestWeight:
    def test_set_then_get_weight(self, client: TestClient) -> None:
        _ingest_note(client)

        result = client.simulate_post(
            "/v1/context/weight",
            json={"item_id": "n1", "item_type": "notebook", "weight": 0},
        )
        assert result.status_code == 200
        assert result.json == {"context_weight": 0, "chunks_updated": 1}

        result = client.simulate_get(
            "/v1/context/weight", params={"item_id": "n1", "item_type": "notebook"}
        )
        assert result.status_code == 200
        assert result.json == {"context_weight": 0}

    def test_zero_weight_excluded_from_retrieval(
        self, client: TestClient, sequence_embedder: SequenceEmbedder
    ) -> None:
        _ingest_note(client)
        sequence_embedder.alias("what to buy", sequence_embedder.vector_for("Milk and eggs."))
        client.simulate_post(
            "/v1/context/weight",
            json={"item_id": "n1", "item_type": "note", "weight": 0},
        )

        result = client.simulate_post("/v1/context/retrieve", json={"query": "what to buy"})

        assert result.json["chunk_count"] == 0

    def test_get_weight_missing_params(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/context/weight", params={"item_id": "n1"})
        assert result.status_code == 400

    def test_get_weight_unknown_source(self, client: TestClient) -> None:
        result = client.simulate_get(
            "/v1/context/weight", params={"item_id": "nope", "item_type": "url"}
        )
        assert result.status_code == 404

    def test_set_weight_out_of_range(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/weight",
            json={"item_id": "n1", "item_type": "note", "weight": 150},
        )
        assert result.status_code == 400

    def test_set_weight_missing_fields(self, client: TestClient) -> None:
        result = client.simulate_post("/v1/context/weight", json={"item_id": "n1"})
        assert result.status_code == 400


class TestPopulateExisting:
    def test_stats_and_populate(self, client: TestClient, fake_uow: FakeUnitOfWork) -> None:
        fake_uow.sources.documents = [SourceRecord("document", "d1", "Doc", "Body text.")]
        fake_uow.sources.urls = [SourceRecord("url", "u1", "Link", "Topic: x")]

        result = client.simulate_get("/v1/context/populate-existing")
        assert result.status_code == 200
        assert result.json["existing_chunks"] == 0
        assert result.json["total_available"] == 2

        result = client.simulate_post("/v1/context/populate-existing")
        assert result.status_code == 200
        assert result.json == {"processed": 2, "failed": 0, "chunks_saved": 2}

        result = client.simulate_get("/v1/context/populate-existing")
        assert result.json["existing_chunks"] == 2


class TestCors:
    def test_preflight(self, client: TestClient) -> None:
        result = client.simulate_options(
            "/v1/context/retrieve", headers={"Origin": "http://localhost:3000"}
        )
        assert result.status_code == 204
        assert result.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
        assert "POST" in result.headers["Access-Control-Allow-Methods"]

    def test_unknown_origin_not_echoed(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/health", headers={"Origin": "http://evil.test"})
        assert result.status_code == 200
        assert "Access-Control-Allow-Origin" not in result.headers


def test_health_routes(client: TestClient) -> None:
    assert client.simulate_get("/v1/health").json == {"status": "ok"}
    assert client.simulate_get("/v1/health/ready").json == {"status": "ready"}


class TestInputValidation:
    def test_retrieve_string_threshold(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/retrieve", json={"query": "hello there", "threshold": "0.5"}
        )
        assert result.status_code == 400
        assert "threshold" in result.json["error"]

    def test_retrieve_string_limit(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/retrieve", json={"query": "hello there", "limit": "x"}
        )
        assert result.status_code == 400
        assert "limit" in result.json["error"]

    def test_retrieve_negative_limit(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/retrieve", json={"query": "hello there", "limit": -1}
        )
        assert result.status_code == 400

    def test_query_threshold_out_of_range(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/query", json={"prompt": "hello", "threshold": 2}
        )
        assert result.status_code == 400
        assert result.json["success"] is False

    def test_weight_item_type_not_string(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/weight",
            json={"item_id": "n1", "item_type": ["note"], "weight": 50},
        )
        assert result.status_code == 400

    def test_ingest_metadata_not_object(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/ingest",
            json={"source_id": "d1", "title": "T", "content": "Body.", "metadata": ["x"]},
        )
        assert result.status_code == 400

    def test_ingest_title_not_string(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/ingest",
            json={"source_id": "d1", "title": {"t": 1}, "content": "Body."},
        )
        assert result.status_code == 400

    def test_ingest_metadata_unknown_source_type(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/context/ingest",
            json={
                "source_id": "d1",
                "title": "T",
                "content": "Body.",
                "metadata": {"source_type": "bogus"},
            },
        )
        assert result.status_code == 400
