#!/usr/bin/env python3
"""Interactive CLI for chatting with a Relay agent."""

import argparse
import uuid

import httpx


def send_message(
    client: httpx.Client,
    base_url: str,
    agent_id: str,
    user_id: str,
    message: str,
    session_id: str | None = None,
) -> str | None:
    """Send one message and print the reply. Returns the session_id."""
    payload = {"message": message, "user_id": user_id}
    if session_id:
        payload["session_id"] = session_id

    try:
        response = client.post(
            f"{base_url}/api/v1/agents/{agent_id}/chat",
            json=payload,
            timeout=60.0,
        )
    except httpx.ConnectError:
        print("\nError: Could not connect to the API server.")
        print("Make sure the server is running: python scripts/run_api_server.py")
        return session_id
    except httpx.ReadTimeout:
        print("\n[Response timed out]")
        return session_id

    data = response.json()
    if response.status_code != 200:
        print(f"\nError {response.status_code}: {data.get('error')}")
        if "fallback_response" in data:
            print(data["fallback_response"])
        return session_id

    print(data["response"])
    print(f"\n[intent: {data['intent']} | via: {data['provenance']} | {data['processing_time']}s]")
    return data.get("session_id", session_id)


def clear_conversation(client: httpx.Client, base_url: str, agent_id: str, user_id: str) -> str | None:
    """Start a new session with the agent. Returns the new session_id."""
    response = client.post(
        f"{base_url}/api/v1/agents/{agent_id}/clear",
        json={"user_id": user_id},
        timeout=10.0,
    )
    if response.status_code != 200:
        print(f"Error {response.status_code}: {response.json().get('error')}")
        return None
    return response.json()["session_id"]


def main() -> None:
    parser = argparse.ArgumentParser(description="Interactive CLI for Relay agents")
    parser.add_argument(
        "agent",
        nargs="?",
        default="neochat",
        help="Agent id to chat with (default: neochat)",
    )
    parser.add_argument(
        "--host",
        default="localhost",
        help="API server host (default: localhost)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="API server port (default: 8000)",
    )
    parser.add_argument(
        "--user",
        default=f"cli-{uuid.uuid4().hex[:8]}",
        help="User id to chat as (default: random)",
    )
    args = parser.parse_args()

    base_url = f"http://{args.host}:{args.port}"

    print("Relay CLI")
    print(f"Connected to {base_url} as {args.user}")
    print("Type 'quit' to exit, 'new' to start a new session\n")

    session_id = None

    with httpx.Client() as client:
        # Check server health
        try:
            health = client.get(f"{base_url}/health", timeout=5.0)
            if health.status_code == 200:
                data = health.json()
                agents = data.get("agents", {})
                available = [k for k, v in agents.items() if v == "available"]
                print(f"Available agents: {', '.join(available)}")
                print(f"Mode: {data.get('mode')}\n")
        except httpx.ConnectError:
            print("Warning: Could not connect to server. Is it running?\n")

        while True:
            try:
                message = input("You: ").strip()

                if not message:
                    continue

                if message.lower() in ("quit", "exit", "q"):
                    print("Goodbye!")
                    break

                if message.lower() == "new":
                    session_id = clear_conversation(client, base_url, args.agent, args.user)
                    print("Started new session.\n")
                    continue

                print(f"\n{args.agent}: ", end="", flush=True)
                session_id = send_message(
                    client, base_url, args.agent, args.user, message, session_id
                )
                print()

            except (KeyboardInterrupt, EOFError):
                print("\nGoodbye!")
                break


if __name__ == "__main__":
    main()
