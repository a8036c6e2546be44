from conftest import sample_best_seller


def test_all_parameters_are_optional(client, upstream):
    resp = client.post("/v1/best-sellers")
    assert resp.status_code == 200
    assert resp.json() == upstream.payload
    assert upstream.last_params["offset"] == "0"


def test_get_with_query_filters(client, upstream):
    resp = client.get(
        "/v1/best-sellers",
        params={"author": "Jane Developer", "title": "The Test Novel", "offset": "20"},
    )
    assert resp.status_code == 200
    assert upstream.last_params["author"] == "Jane Developer"
    assert upstream.last_params["title"] == "The Test Novel"
    assert upstream.last_params["offset"] == "20"


def test_post_all_filters_together(client, upstream):
    resp = client.post(
        "/v1/best-sellers",
        json={
            "author": "Jane Developer",
            "isbn": "1234567890;1234567890123",
            "title": "The Test Novel",
            "offset": 20,
        },
    )
    assert resp.status_code == 200
    assert upstream.last_params == {
        "api-key": "test-key",
        "author": "Jane Developer",
        "title": "The Test Novel",
        "offset": "20",
        "isbn": "1234567890;1234567890123",
    }


def test_isbn_array_is_forwarded_semicolon_joined(client, upstream):
    resp = client.post("/v1/best-sellers", json={"isbn": ["1234567890", "1234567890123"]})
    assert resp.status_code == 200
    assert "isbn=1234567890;1234567890123" in upstream.last_query


def test_comma_separated_isbn_is_forwarded_with_semicolons(client, upstream):
    resp = client.get("/v1/best-sellers", params={"isbn": "1234567890,1234567890123"})
    assert resp.status_code == 200
    assert upstream.last_params["isbn"] == "1234567890;1234567890123"


def test_repeated_isbn_query_params_are_an_array(client, upstream):
    resp = client.get("/v1/best-sellers?isbn=1234567890&isbn=1234567890123")
    assert resp.status_code == 200
    assert upstream.last_params["isbn"] == "1234567890;1234567890123"


def test_bracketed_isbn_query_params_are_an_array(client, upstream):
    resp = client.get("/v1/best-sellers?isbn[]=1234567890&isbn[]=1234567890123")
    assert resp.status_code == 200
    assert upstream.last_params["isbn"] == "1234567890;1234567890123"


def test_invalid_isbn_is_unprocessable(client, upstream):
    for isbn in ["123abc4567", "1234567890;123abc4567", "123", "12345678901234"]:
        resp = client.post("/v1/best-sellers", json={"isbn": isbn})
        assert resp.status_code == 422, isbn
        body = resp.json()
        assert body["message"] == "The given data was invalid."
        assert list(body["errors"]) == ["isbn"]
    assert upstream.requests == []


def test_mixed_isbn_list_is_rejected(client, upstream):
    resp = client.get("/v1/best-sellers?isbn=1234567890&isbn=123")
    assert resp.status_code == 422
    assert "isbn" in resp.json()["errors"]
    assert upstream.requests == []


def test_offset_validation(client, upstream):
    for offset in [25, -20, "abc"]:
        resp = client.post("/v1/best-sellers", json={"offset": offset})
        assert resp.status_code == 422, offset
        assert list(resp.json()["errors"]) == ["offset"]

    resp = client.get("/v1/best-sellers", params={"offset": "25"})
    assert resp.status_code == 422
    assert upstream.requests == []


def test_offset_zero_and_larger_pages(client, upstream):
    upstream.respond(
        200, {"status": "OK", "num_results": 45, "results": [sample_best_seller()] * 5}
    )
    resp = client.post("/v1/best-sellers", json={"offset": 40})
    assert resp.status_code == 200
    assert len(resp.json()["results"]) == 5
    assert upstream.last_params["offset"] == "40"

    resp = client.post("/v1/best-sellers", json={"offset": 0})
    assert resp.status_code == 200
    assert upstream.last_params["offset"] == "0"


def test_empty_results_pass_through(client, upstream):
    payload = {"status": "OK", "num_results": 0, "results": []}
    upstream.respond(200, payload)
    resp = client.post("/v1/best-sellers", json={"author": "Nonexistent Author"})
    assert resp.status_code == 200
    assert resp.json() == payload


def test_upstream_error_is_relayed(client, upstream):
    upstream.respond(500, {"error": "API Error"})
    resp = client.post("/v1/best-sellers")
    assert resp.status_code == 500
    assert resp.json() == {"error": "API Error"}


def test_upstream_error_status_is_mirrored(client, upstream):
    upstream.respond(401, {"fault": {"faultstring": "Invalid ApiKey"}})
    resp = client.get("/v1/best-sellers")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid ApiKey"}


def test_unknown_fields_are_not_forwarded(client, upstream):
    resp = client.post("/v1/best-sellers", json={"title": "T", "list": "hardcover-fiction"})
    assert resp.status_code == 200
    assert "list" not in upstream.last_params


def test_non_object_body_is_unprocessable(client, upstream):
    resp = client.post("/v1/best-sellers", json=["1234567890"])
    assert resp.status_code == 422
    assert list(resp.json()["errors"]) == ["body"]
    assert upstream.requests == []


def test_malformed_json_body_is_unprocessable(client, upstream):
    resp = client.post(
        "/v1/best-sellers",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 422
    assert list(resp.json()["errors"]) == ["body"]
    assert upstream.requests == []


def test_health_and_request_id(client):
    resp = client.get("/health", headers={"X-Request-Id": "abc123"})
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.headers["X-Request-Id"] == "abc123"

    resp = client.get("/health")
    assert resp.headers["X-Request-Id"]


def test_oversized_offset_is_unprocessable(client, upstream):
    resp = client.get("/v1/best-sellers", params={"offset": "2" + "0" * 5000})
    assert resp.status_code == 422
    assert list(resp.json()["errors"]) == ["offset"]
    assert upstream.requests == []


def test_unencodable_author_is_unprocessable(client, upstream):
    resp = client.post(
        "/v1/best-sellers",
        content=b'{"author": "\\ud800"}',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 422
    assert list(resp.json()["errors"]) == ["author"]
    assert upstream.requests == []


def test_plain_and_bracketed_isbn_params_are_merged_in_order(client, upstream):
    resp = client.get("/v1/best-sellers?isbn[]=1234567890&isbn=1234567890123&isbn[]=0987654321")
    assert resp.status_code == 200
    assert upstream.last_params["isbn"] == "1234567890;1234567890123;0987654321"
