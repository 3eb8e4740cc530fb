"""Locally generated placeholder responses.

Used by the HTTP layer when the provider cannot be reached or rejects a
request, so the user still gets feedback.
"""

from .analytics import SessionMetrics
from .prompts import consistency_score

OPTIMAL_RELEASE_ANGLE = 52.0


def demo_insights(metrics: SessionMetrics, sport: str) -> str:
    accuracy = "good" if metrics.acc > 70 else "needs improvement"
    precision = "good" if metrics.mre < 8 else "room for improvement"
    release = "optimal" if abs(OPTIMAL_RELEASE_ANGLE - metrics.release_avg) < 2 else "could be adjusted"
    return (
        f"Demo Coaching Insights for {sport}:\n\n"
        f"• Your accuracy of {metrics.acc}% is {accuracy}\n"
        f"• Mean error of {metrics.mre}cm suggests {precision} in precision\n"
        f"• Release angle of {metrics.release_avg}° is {release}\n\n"
        "Note: This is a demo. Connect to a chat-completion provider for AI-powered insights."
    )


def demo_chat_response(message: str, metrics: SessionMetrics, sport: str) -> str:
    lowered = message.lower()

    if "accuracy" in lowered or "improve" in lowered:
        return (
            f"Demo Response: To improve your {sport} accuracy (currently {metrics.acc}%), focus on:\n\n"
            "• Consistent release technique\n"
            "• Proper follow-through\n"
            "• Mental focus and concentration\n"
            "• Regular practice with feedback\n\n"
            "Note: Connect to a chat-completion provider for personalized AI coaching."
        )

    if "technique" in lowered or "form" in lowered:
        return (
            "Demo Response: Your current technique shows:\n\n"
            f"• Release angle: {metrics.release_avg}° (target: ~{OPTIMAL_RELEASE_ANGLE:g}° for basketball)\n"
            f"• Consistency: {consistency_score(metrics):g}% (based on error spread)\n"
            f"• Mean error: {metrics.mre}cm\n\n"
            "Focus on maintaining consistent form throughout your shot.\n\n"
            "Note: Connect to a chat-completion provider for detailed technique analysis."
        )

    if "practice" in lowered or "training" in lowered:
        return (
            "Demo Response: Based on your performance:\n\n"
            "• Practice 15-30 minutes daily\n"
            "• Focus on form over quantity\n"
            "• Record your sessions for analysis\n"
            "• Work on consistency drills\n\n"
            "Note: Connect to a chat-completion provider for customized practice plans."
        )

    return (
        f"Demo Response: I'd be happy to help with your {sport} training! Your current stats:\n\n"
        f"• Accuracy: {metrics.acc}%\n"
        f"• Mean Error: {metrics.mre}cm\n"
        f"• Total Attempts: {metrics.total}\n\n"
        "Ask me about technique, practice, or improvement strategies.\n\n"
        "Note: Connect to a chat-completion provider for AI-powered coaching."
    )
