"""Plan and cost estimation for a summarization run."""

from .config import SummarizerConfig
from .summarize.chunking import chunk_text, estimate_token_count

# Approximate costs per 1M tokens (input/output, USD)
# These are estimates - actual costs may vary
MODEL_COSTS = {
    "llama-3.3-70b-versatile": {"input": 0.59, "output": 0.79},
    "llama-3.1-8b-instant": {"input": 0.05, "output": 0.08},
    "gpt-4o-mini": {"input": 0.15, "output": 0.60},
    "gpt-4o": {"input": 2.50, "output": 10.00},
}

# Instruction overhead added to every request
PROMPT_OVERHEAD_TOKENS = 500

# Thresholds for warnings
WARN_TRANSCRIPT_TOKENS = 50_000
WARN_ESTIMATED_COST = 0.50


def estimate_summarization_cost(text: str, config: SummarizerConfig | None = None) -> dict:
    """
    Estimate the calls and cost of summarizing text with the primary provider.

    Output tokens are taken at their configured limits, so the estimate is an
    upper bound on output.

    Returns dict with:
        - path: "direct" or "chunked"
        - token_count: estimated transcript tokens
        - num_chunks: number of transcript chunks
        - num_calls: LLM requests on the happy path
        - estimated_input_tokens / estimated_output_tokens
        - estimated_cost: cost in USD
        - model: model the estimate is priced for
        - should_warn: whether to show a warning
    """
    config = config or SummarizerConfig()
    model = config.primary.model
    costs = MODEL_COSTS.get(model, MODEL_COSTS["llama-3.3-70b-versatile"])
    token_count = estimate_token_count(text)

    if token_count <= config.direct_token_ceiling:
        path = "direct"
        num_chunks = 1
        num_calls = 1
        total_input = token_count + PROMPT_OVERHEAD_TOKENS
        total_output = config.max_output_tokens
    else:
        path = "chunked"
        num_chunks = len(chunk_text(text, config.chunk_token_ceiling))
        num_calls = num_chunks + 1

        # Map phase: each chunk + instructions -> chunk summary
        map_input = token_count + num_chunks * PROMPT_OVERHEAD_TOKENS
        map_output = num_chunks * config.primary.chunk_max_tokens

        # Reduce phase: all chunk summaries + instructions -> final summary
        reduce_input = map_output + PROMPT_OVERHEAD_TOKENS
        reduce_output = config.reduce_max_tokens

        total_input = map_input + reduce_input
        total_output = map_output + reduce_output

    input_cost = (total_input / 1_000_000) * costs["input"]
    output_cost = (total_output / 1_000_000) * costs["output"]
    total_cost = input_cost + output_cost

    return {
        "path": path,
        "token_count": token_count,
        "num_chunks": num_chunks,
        "num_calls": num_calls,
        "estimated_input_tokens": total_input,
        "estimated_output_tokens": total_output,
        "estimated_cost": total_cost,
        "model": model,
        "should_warn": token_count > WARN_TRANSCRIPT_TOKENS or total_cost > WARN_ESTIMATED_COST,
    }


def format_cost_warning(
    operation: str,
    estimated_cost: float,
    details: str = "",
) -> str:
    """Format a cost warning message."""
    msg = f"Cost warning: {operation} may cost approximately ${estimated_cost:.3f}"
    if details:
        msg += f" ({details})"
    return msg
