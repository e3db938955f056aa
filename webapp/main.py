from __future__ import annotations

import logging
from dataclasses import is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from front_end import (
	Diagnostic,
	FrontEndEngine,
	SemanticResult,
	SemanticSuccess,
	SyntaxResult,
	SyntaxSuccess,
	Token,
	check_semantics,
	format_lexical_report,
	format_semantic_report,
	format_syntax_report,
	tokenize,
	validate_syntax,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="C/Java Front End Analyzer", version="1.0.0")

STATIC_DIR = Path(__file__).parent / "static"
if STATIC_DIR.exists():
	app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)


class AnalyzeRequest(BaseModel):
	source: str
	dialect: Literal["c", "java"] = "c"


def _to_json(obj: Any, *, depth: int = 0, max_depth: int = 12) -> Any:
	"""Best-effort conversion of analysis results to JSON-safe structures."""
	if depth > max_depth:
		return {"_truncated": True}
	if obj is None:
		return None
	if isinstance(obj, (str, int, float, bool)):
		return obj
	if isinstance(obj, (list, tuple)):
		return [_to_json(x, depth=depth + 1, max_depth=max_depth) for x in obj]
	if isinstance(obj, dict):
		return {str(k): _to_json(v, depth=depth + 1, max_depth=max_depth) for k, v in obj.items()}
	if is_dataclass(obj):
		data: Dict[str, Any] = {"_type": obj.__class__.__name__}
		for k, v in obj.__dict__.items():
			data[k] = _to_json(v, depth=depth + 1, max_depth=max_depth)
		return data
	# Enums (Severity/TokenKind/ConstructKind)
	if hasattr(obj, "name") and hasattr(obj, "value"):
		return getattr(obj, "name")
	return str(obj)


def _tokens_json(tokens: Sequence[Token]) -> List[Dict[str, Any]]:
	return [{"kind": t.kind.name, "lexeme": t.lexeme, "line": t.line} for t in tokens]


def _diagnostics_json(diagnostics: Sequence[Diagnostic]) -> List[Dict[str, Any]]:
	return [
		{
			"severity": d.severity.name,
			"line": d.line,
			"message": d.message,
			"hint": d.hint,
		}
		for d in diagnostics
	]


def _syntax_json(result: SyntaxResult) -> Dict[str, Any]:
	if isinstance(result, SyntaxSuccess):
		return {
			"success": True,
			"message": result.message,
			"tags": [{"kind": tag.kind.name, "name": tag.name, "line": tag.line} for tag in result.tags],
		}
	return {"success": False, "errors": _diagnostics_json(result.errors)}


def _semantic_json(result: SemanticResult) -> Dict[str, Any]:
	if isinstance(result, SemanticSuccess):
		return {
			"success": True,
			"message": result.message,
			"symbol_table": _to_json(result.symbols),
			"functions": _to_json(result.functions),
			"warnings": _diagnostics_json(result.warnings),
		}
	return {
		"success": False,
		"errors": _diagnostics_json(result.errors),
		"warnings": _diagnostics_json(result.warnings),
	}


@app.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
	index_path = STATIC_DIR / "index.html"
	if index_path.exists():
		return HTMLResponse(index_path.read_text(encoding="utf-8"))
	return HTMLResponse(
		"<h2>C/Java Front End Analyzer API</h2>"
		"<p>POST <code>/api/lex</code>, <code>/api/syntax</code>, <code>/api/semantic</code> or "
		"<code>/api/analyze</code> with JSON: <code>{\"source\": \"...\", \"dialect\": \"c\"}</code></p>"
	)


@app.get("/health")
def health() -> Dict[str, str]:
	return {"status": "ok"}


@app.post("/api/lex")
def lex_source(req: AnalyzeRequest) -> Dict[str, Any]:
	tokens = tokenize(req.source, req.dialect)
	return {
		"dialect": req.dialect,
		"token_count": len(tokens),
		"tokens": _tokens_json(tokens),
		"report": format_lexical_report(tokens),
	}


@app.post("/api/syntax")
def syntax_source(req: AnalyzeRequest) -> Dict[str, Any]:
	tokens = tokenize(req.source, req.dialect)
	result = validate_syntax(tokens, req.dialect)
	return {
		"dialect": req.dialect,
		"token_count": len(tokens),
		"result": _syntax_json(result),
		"report": format_syntax_report(result),
	}


@app.post("/api/semantic")
def semantic_source(req: AnalyzeRequest) -> Dict[str, Any]:
	tokens = tokenize(req.source, req.dialect)
	result = check_semantics(tokens, req.dialect)
	return {
		"dialect": req.dialect,
		"token_count": len(tokens),
		"result": _semantic_json(result),
		"report": format_semantic_report(result),
	}


@app.post("/api/analyze")
def analyze_source(req: AnalyzeRequest) -> Dict[str, Any]:
	"""Full pipeline: lexer, then syntax, then semantic only when syntax succeeded."""
	art = FrontEndEngine(req.dialect).run(req.source)
	logger.debug("analyzed %d tokens in %.2f ms", len(art.tokens), art.duration_ms)
	return {
		"dialect": art.dialect,
		"duration_ms": art.duration_ms,
		"token_count": len(art.tokens),
		"success": art.success,
		"tokens": _tokens_json(art.tokens),
		"syntax": _syntax_json(art.syntax) if art.syntax is not None else None,
		"semantic": _semantic_json(art.semantic) if art.semantic is not None else None,
		"report": art.report(),
	}
