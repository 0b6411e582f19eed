#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP, no WhatsApp).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable user id for the session
- Sends your typed messages through the same HandleIncomingMessageUseCase
- Prints progress notes sent on the way and the final reply
"""

from __future__ import annotations

import asyncio
import os
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

load_dotenv()


def _print_header(user_id: str) -> None:
    print("\nLocal Chat Harness")
    print("-" * 60)
    print(f"user_id: {user_id}")
    print("Type your message and press Enter.")
    print("Commands: /new (new user), /state, /quit, /help")
    print("-" * 60)


async def _chat() -> None:
    from farmacia_bot.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
    from farmacia_bot.wiring.dependencies import get_container, get_whatsapp_platform

    user_id = os.getenv("CHAT_USER_ID", "5511900000001@c.us")
    container = get_container()
    use_case = container["use_case"]
    store = container["store"]
    platform = get_whatsapp_platform()
    _print_header(user_id)

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print("Commands:")
            print("  /new   -> start over as a different user")
            print("  /state -> show the current session")
            print("  /quit  -> exit")
            continue
        if cmd == "/new":
            user_id = f"55119{int(time.time()) % 100000000:08d}@c.us"
            print(f"New user_id: {user_id}")
            continue
        if cmd == "/state":
            print(store.get(user_id))
            continue

        sent_before = len(platform.sent) if isinstance(platform, MockWhatsAppPlatform) else 0
        reply = await use_case.handle_input(user_id, user_text)

        if isinstance(platform, MockWhatsAppPlatform):
            for _, note in platform.sent[sent_before:]:
                print(f"(note) {note}")

        print("\n--- Reply ---")
        print((reply or "").strip() or "(no reply)")
        print(f"phase: {store.get(user_id).phase.value}")
        print("-" * 60)


def main() -> None:
    asyncio.run(_chat())


if __name__ == "__main__":
    main()
