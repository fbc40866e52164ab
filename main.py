import asyncio
import sys

from cognimap.cognition.actions import generate_critical_summary
from cognimap.cognition.schemas import CriticalSummaryRequest
from cognimap.main import app


async def main():
    # Reuse the runner wired by the application factory
    runner = app.state.runner

    text = " ".join(sys.argv[1:]) or "Everyone knows this policy is a disaster, experts agree."
    result = await generate_critical_summary(
        runner,
        CriticalSummaryRequest(analyzed_text=text, analysis_style="journalistic", language="en"),
    )
    print(f"Critical summary: {result.summary}")

if __name__ == "__main__":
    asyncio.run(main())
