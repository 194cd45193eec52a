from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Allow running `python backend/app.py` from repo root.
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from lyne_solver.graph import Edge
from lyne_solver.puzzle import Puzzle
from lyne_solver.solver import SolveTimeoutError, solve_puzzle

logger = logging.getLogger(__name__)

MAX_TIMEOUT_MS = 1_000_000


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _examples_dir() -> Path:
    return _repo_root() / "examples" / "puzzles"


def _parse_puzzle(text: str, *, name: str) -> Puzzle:
    if name.lower().endswith(".json"):
        return Puzzle.from_json(text)
    return Puzzle.from_lyne_text(text, source_name=name)


def _edge_payload(edge: Edge) -> List[str]:
    return [edge.first.id, edge.second.id]


def _graph_payload(puzzle: Puzzle) -> Dict[str, Any]:
    nodes = []
    for node in puzzle.nodes():
        nodes.append(
            {
                "id": node.id,
                "row": node.row,
                "col": node.col,
                "kind": node.kind.value,
                "terminal": node.terminal,
                "desired_edges": node.desired_edges,
            }
        )
    return {"nodes": nodes, "edges": [_edge_payload(e) for e in puzzle.edges()]}


def _list_puzzle_files() -> List[Path]:
    base = _examples_dir()
    if not base.exists():
        return []
    return [p for p in sorted(base.rglob("*")) if p.is_file() and p.suffix.lower() in {".lyne", ".json"}]


def _build_entry(path: Path) -> Dict[str, Any]:
    error: Optional[str] = None
    nodes = edges = colors = None
    try:
        puzzle = _parse_puzzle(path.read_text(encoding="utf-8"), name=path.name)
        nodes = len(puzzle.graph)
        edges = len(puzzle.edges())
        colors = len(puzzle.colors())
    except ValueError as e:
        error = f"Parse error: {e}"
    return {
        "name": str(path.relative_to(_examples_dir())),
        "nodes": nodes,
        "edges": edges,
        "colors": colors,
        "error": error,
    }


class ParseRequest(BaseModel):
    name: str = Field(default="puzzle.lyne")
    text: str


class SolveRequest(ParseRequest):
    timeout_ms: Optional[int] = Field(default=30_000, ge=1, le=MAX_TIMEOUT_MS)


app = FastAPI(title="Lyne Solver API", version="0.1.0")

cors_raw = os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
cors_list = [c.strip() for c in cors_raw.split(",") if c.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_list or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/puzzles")
def list_puzzles() -> Dict[str, Any]:
    return {"entries": [_build_entry(path) for path in _list_puzzle_files()]}


@app.post("/parse")
def parse_puzzle(req: ParseRequest) -> Dict[str, Any]:
    try:
        puzzle = _parse_puzzle(req.text, name=req.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {
        "counts": {
            "nodes": len(puzzle.graph),
            "edges": len(puzzle.edges()),
            "colors": len(puzzle.colors()),
        },
        "meta": puzzle.meta,
        "terminals": {p.first.kind.value: [p.first.id, p.second.id] for p in puzzle.terminals()},
    }


@app.post("/solve")
def solve(req: SolveRequest) -> Dict[str, Any]:
    try:
        puzzle = _parse_puzzle(req.text, name=req.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    try:
        res = solve_puzzle(puzzle, timeout_ms=req.timeout_ms)
    except SolveTimeoutError as e:
        raise HTTPException(status_code=504, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    logger.info("solved %s: %s", req.name, res.stats)
    return {
        "paths": {color.value: [n.id for n in path] for color, path in res.paths.items()},
        "edges": [_edge_payload(e) + [k.value] for e, k in sorted(res.edge_kind.items())],
        "stats": res.stats,
        "graph": _graph_payload(puzzle),
    }


@app.post("/graph")
def build_graph(req: ParseRequest) -> Dict[str, Any]:
    try:
        puzzle = _parse_puzzle(req.text, name=req.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"graph": _graph_payload(puzzle)}
