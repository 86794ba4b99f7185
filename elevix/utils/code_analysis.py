from __future__ import annotations

import ast
from typing import Any, Dict, List


def comment_density(code: str) -> float:
	lines = code.splitlines()
	comment_lines = sum(1 for l in lines if l.strip().startswith("#"))
	code_lines = sum(1 for l in lines if l.strip() and not l.strip().startswith("#"))
	if code_lines == 0:
		return 0.0
	return round(min(1.0, comment_lines / code_lines), 3)


def analyze_python_code(code: str) -> Dict[str, Any]:
	"""Static hints for a Python snippet, reported next to the model's explanation.

	Never executes the code. On a syntax error only the text-level signals are filled.
	"""
	result: Dict[str, Any] = {
		"parse_ok": False,
		"uses_recursion": False,
		"uses_memoization": False,
		"loop_nesting_depth": 0,
		"function_count": 0,
		"comment_density": comment_density(code),
		"estimated_time_complexity_hint": None,
	}
	try:
		tree = ast.parse(code)
	except (SyntaxError, ValueError):
		return result
	result["parse_ok"] = True

	func_defs: List[str] = []
	max_depth = 0
	depth = 0
	recursion = False
	memo = False

	class Visitor(ast.NodeVisitor):
		def _visit_function(self, node: ast.AST) -> None:
			nonlocal recursion, memo
			func_defs.append(node.name)
			for d in node.decorator_list:
				target = d.func if isinstance(d, ast.Call) else d
				name = getattr(target, "id", None) or getattr(target, "attr", None)
				if name in {"lru_cache", "cache"}:
					memo = True
			for arg in node.args.args:
				if arg.arg.lower() in {"memo", "cache"}:
					memo = True
			for n in ast.walk(node):
				if isinstance(n, ast.Call) and getattr(n.func, "id", None) == node.name:
					recursion = True
			self.generic_visit(node)

		visit_FunctionDef = _visit_function
		visit_AsyncFunctionDef = _visit_function

		def _visit_loop(self, node: ast.AST) -> None:
			nonlocal depth, max_depth
			depth += 1
			max_depth = max(max_depth, depth)
			self.generic_visit(node)
			depth -= 1

		visit_For = _visit_loop
		visit_While = _visit_loop

		def visit_Assign(self, node: ast.Assign) -> None:
			nonlocal memo
			for t in node.targets:
				if isinstance(t, ast.Name) and t.id.lower() in {"memo", "cache"}:
					memo = True
			self.generic_visit(node)

	Visitor().visit(tree)

	hint = None
	if max_depth >= 2 and not recursion:
		hint = "Likely O(n^2) or worse due to nested loops"
	elif recursion and not memo:
		hint = "Recursive without memoization; may be exponential"
	elif recursion and memo:
		hint = "Recursive with memoization; likely polynomial"
	elif max_depth == 1:
		hint = "Single loop; likely linear"

	result.update(
		uses_recursion=recursion,
		uses_memoization=memo,
		loop_nesting_depth=max_depth,
		function_count=len(func_defs),
		estimated_time_complexity_hint=hint,
	)
	return result
