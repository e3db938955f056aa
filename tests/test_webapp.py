import pytest
from fastapi.testclient import TestClient

from front_end import check_semantics, format_semantic_report, tokenize
from webapp.main import app


@pytest.fixture
def client():
	return TestClient(app)


def test_health(client):
	assert client.get("/health").json() == {"status": "ok"}


def test_index_fallback(client):
	resp = client.get("/")
	assert resp.status_code == 200
	assert "/api/analyze" in resp.text


def test_lex_endpoint(client):
	data = client.post("/api/lex", json={"source": "int x = 5;"}).json()
	assert data["token_count"] == 5
	assert data["tokens"][0] == {"kind": "KEYWORD", "lexeme": "int", "line": 1}
	assert data["report"].startswith("LEXICAL ANALYSIS RESULTS")


def test_syntax_endpoint_failure(client):
	data = client.post("/api/syntax", json={"source": "if (a > 0 { return 1; }"}).json()
	result = data["result"]
	assert result["success"] is False
	assert result["errors"][0]["message"] == "Expected SEPARATOR ')', but got SEPARATOR '{'"
	assert result["errors"][0]["severity"] == "ERROR"


def test_syntax_endpoint_success(client):
	data = client.post("/api/syntax", json={"source": "int x = 5;"}).json()
	assert data["result"]["tags"] == [{"kind": "VARIABLE_DECLARATION", "name": "x", "line": 1}]


def test_semantic_endpoint_matches_python_api(client):
	source = "int x = 5;"
	data = client.post("/api/semantic", json={"source": source}).json()
	result = data["result"]
	assert result["success"] is True
	assert result["symbol_table"]["global:x"]["initialized"] is True
	assert result["symbol_table"]["global:x"]["used"] is False
	assert result["warnings"][0]["message"] == "Variable 'x' is declared but never used"
	assert data["report"] == format_semantic_report(check_semantics(tokenize(source)))


def test_semantic_endpoint_java(client):
	data = client.post("/api/semantic", json={"source": "y = 3;", "dialect": "java"}).json()
	assert data["dialect"] == "java"
	assert data["result"]["errors"][0]["message"] == "Variable 'y' is not declared"


def test_analyze_endpoint_gates_semantic(client):
	data = client.post("/api/analyze", json={"source": "int x = 5"}).json()
	assert data["success"] is False
	assert data["syntax"]["success"] is False
	assert data["semantic"] is None

	ok = client.post("/api/analyze", json={"source": "int x = 5;"}).json()
	assert ok["success"] is True
	assert ok["semantic"]["success"] is True


def test_unknown_dialect_rejected(client):
	resp = client.post("/api/lex", json={"source": "int x;", "dialect": "cobol"})
	assert resp.status_code == 422
