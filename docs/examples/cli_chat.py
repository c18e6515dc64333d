import asyncio
import os
from typing import List

from dotenv import load_dotenv

from generative_ai_client import (
    APIController,
    Content,
    GenerateContentRequest,
    GenerativeAIException,
    RequestOptions,
    setup_logging,
)

# Load environment variables
load_dotenv()


async def main() -> None:
    """
    Runs a streaming chat in the terminal.
    """
    print("Welcome to the CLI Chat!")

    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        print("Error: GEMINI_API_KEY not found in environment variables.")
        return

    if os.getenv("DEBUG"):
        setup_logging()

    system_instruction = Content.build("You are a helpful assistant.", role=None)
    history: List[Content] = []

    async with APIController(
        api_key=api_key,
        model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        request_options=RequestOptions(timeout=60),
    ) as controller:
        print("\nStart chatting! Type 'exit' or 'quit' to stop.")
        while True:
            user_input = input("\nYou: ").strip()
            if user_input.lower() in ["exit", "quit"]:
                print("Goodbye!")
                break

            if not user_input:
                continue

            history.append(Content.build(user_input))
            request = GenerateContentRequest(contents=history, system_instruction=system_instruction)

            try:
                reply = []
                print("Assistant: ", end="", flush=True)
                async for chunk in controller.generate_content_stream(request):
                    if chunk.is_blocked:
                        print(f"[blocked: {chunk.prompt_feedback.block_reason.value}]", end="")
                        break
                    if chunk.text:
                        reply.append(chunk.text)
                        print(chunk.text, end="", flush=True)
                print()
                if reply:
                    history.append(Content.build("".join(reply), role="model"))
                else:
                    history.pop()

            except GenerativeAIException as e:
                print(f"\nAn error occurred: {e}")
                history.pop()


if __name__ == "__main__":
    asyncio.run(main())
