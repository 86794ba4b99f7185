from __future__ import annotations

from elevix.schemas import CodeRunnerInput, CodeRunnerOutput, CodeRunnerReply, StaticSignals
from elevix.services.flows.base import run_flow
from elevix.utils.code_analysis import analyze_python_code


CODE_RUNNER_PROMPT = (
	"You are an expert AI Coding Assistant and Code Execution Simulator. You are given a code snippet in "
	"'{language}'. Analyze it and give comprehensive feedback:\n"
	"1. explanation: what the code does, its purpose, logic flow and key operations.\n"
	"2. simulated_output: if the snippet is executable and prints or returns something (console.log, print, a "
	"SQL query returning rows), a realistic simulated output. For complex or non-runnable code describe the "
	"expected outcome; for SQL describe the result set with a small illustrative sample. Omit when no output "
	"is expected.\n"
	"3. suggestions: clarity, efficiency or readability improvements, bugs or unhandled edge cases, best "
	"practices for the language, alternatives, security notes. Omit when there is nothing to suggest.\n"
	"4. is_executable: true if this looks like complete runnable code, false if it is a fragment, pseudo-code "
	"or needs more context. Omit when unsure.\n"
	"If no language is specified, infer it from the syntax. Be concise yet thorough."
)

PYTHON_ALIASES = {"python", "py", "python3"}


async def run_code_and_get_feedback(data: CodeRunnerInput) -> CodeRunnerOutput:
	language = data.language or "unspecified"
	user_content = f"Code Snippet:\n```{data.language or ''}\n{data.code_snippet}\n```"
	# the model is only asked for CodeRunnerReply keys; any static_signals it adds are ignored
	reply = await run_flow(
		"code_runner",
		CodeRunnerReply,
		CODE_RUNNER_PROMPT.format(language=language),
		user_content,
		empty_message="AI failed to analyze the code snippet.",
	)
	signals = None
	if (data.language or "").strip().lower() in PYTHON_ALIASES:
		signals = StaticSignals(**analyze_python_code(data.code_snippet))
	return CodeRunnerOutput(**reply.model_dump(), static_signals=signals)
