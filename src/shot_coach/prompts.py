"""Chat message builders that embed performance data into prompts."""

from typing import Iterable, Sequence

from .analytics import Attempt, SessionMetrics, analyze_patterns, hit_rate, mean_error
from .llm import ChatMessage


def coaching_insights_messages(metrics: SessionMetrics, sport: str) -> list[ChatMessage]:
    system_prompt = (
        f"You are an expert sports coach specializing in {sport}. "
        "Analyze the following performance metrics and provide specific, actionable coaching advice.\n\n"
        "Focus on:\n"
        "- Technical improvements\n"
        "- Mental preparation\n"
        "- Practice recommendations\n"
        "- Common mistakes to avoid\n"
        "- Progress tracking suggestions\n\n"
        "Keep responses concise, practical, and encouraging."
    )
    user_prompt = (
        "Performance Analysis Request:\n\n"
        f"Sport: {sport}\n"
        f"Total Attempts: {metrics.total}\n"
        f"Accuracy: {metrics.acc}%\n"
        f"Makes: {metrics.makes}\n"
        f"Mean Radial Error: {metrics.mre} cm\n"
        f"Spread: {metrics.spread} cm\n"
        f"Release Angle: {metrics.release_avg}° ± {metrics.release_sd}°\n\n"
        "Please provide specific coaching insights and recommendations."
    )
    return [ChatMessage("system", system_prompt), ChatMessage("user", user_prompt)]


def practice_plan_messages(
    metrics: SessionMetrics,
    sport: str,
    time_available: int = 30,
) -> list[ChatMessage]:
    system_prompt = (
        "You are a professional sports coach. "
        "Create a detailed practice plan based on the performance data.\n\n"
        "Requirements:\n"
        f"- Duration: {time_available} minutes\n"
        f"- Sport: {sport}\n"
        "- Focus on areas needing improvement\n"
        "- Include warm-up, main exercises, and cool-down\n"
        "- Provide specific drills and techniques\n"
        "- Include progress tracking methods"
    )
    user_prompt = (
        "Create a practice plan for:\n\n"
        "Current Performance:\n"
        f"- Accuracy: {metrics.acc}%\n"
        f"- Mean Error: {metrics.mre} cm\n"
        f"- Consistency: {consistency_score(metrics):g}%\n"
        f"- Release Angle: {metrics.release_avg}°\n\n"
        "Focus on improving the weakest areas."
    )
    return [ChatMessage("system", system_prompt), ChatMessage("user", user_prompt)]


def shot_pattern_messages(attempts: Iterable[Attempt], sport: str) -> list[ChatMessage]:
    snapshot = tuple(attempts)
    signals = analyze_patterns(snapshot)

    system_prompt = (
        f"You are a sports analyst for {sport}. "
        "Analyze shot patterns and provide technical feedback.\n\n"
        "Focus on:\n"
        "- Consistency patterns\n"
        "- Common error directions\n"
        "- Fatigue indicators\n"
        "- Technique suggestions\n"
        "- Mental approach recommendations"
    )
    user_prompt = (
        "Shot Pattern Analysis:\n\n"
        f"Total Shots: {len(snapshot)}\n"
        f"Hit Rate: {hit_rate(snapshot) * 100:.1f}%\n"
        f"Average Error: {mean_error(snapshot):.2f} cm\n\n"
        "Pattern Analysis:\n"
        f"- Left/Right Bias: {'Right' if signals.lr_bias > 0 else 'Left'} ({abs(signals.lr_bias):.1f} cm)\n"
        f"- High/Low Bias: {'High' if signals.ud_bias > 0 else 'Low'} ({abs(signals.ud_bias):.1f} cm)\n"
        f"- Consistency Trend: {signals.trend.value}\n"
        f"- Fatigue Pattern: {'Yes' if signals.fatigue else 'No'}\n\n"
        "Provide specific technical recommendations."
    )
    return [ChatMessage("system", system_prompt), ChatMessage("user", user_prompt)]


def chat_messages(
    metrics: SessionMetrics,
    sport: str,
    history: Sequence[ChatMessage],
    user_message: str,
) -> list[ChatMessage]:
    """Context-aware system message, the conversation so far, then the new turn.

    System messages in the history are dropped so the request keeps a
    single leading system message.
    """
    system_prompt = (
        f"You are an expert sports coach assistant. The user is working on {sport} accuracy training.\n\n"
        "Current Performance Context:\n"
        f"- Total Attempts: {metrics.total}\n"
        f"- Accuracy: {metrics.acc}%\n"
        f"- Mean Radial Error: {metrics.mre} cm\n"
        f"- Release Angle: {metrics.release_avg}° ± {metrics.release_sd}°\n\n"
        "Provide helpful, specific coaching advice based on their questions and current performance data."
    )
    return [
        ChatMessage("system", system_prompt),
        *(m for m in history if m.role != "system"),
        ChatMessage("user", user_message),
    ]


def consistency_score(metrics: SessionMetrics) -> float:
    """Rough consistency percentage derived from the error spread."""
    return 100 - metrics.spread * 4
