"""
Basic Session Example - Restore, log in, route by role, log out.

Run against a local backend:
    ANVAYA_BASE_URL=http://localhost:8080 ANVAYA_RUNTIME_TARGET=web python examples/basic_session.py
"""

import asyncio
import getpass
import logging

from anvaya_client import AnvayaClient
from anvaya_client.ports import GateOutcome


async def main():
    async with AnvayaClient() as client:
        # Restore the previous session, if any
        snapshot = await client.start()
        print(f"Restored state: {snapshot.state.value}")

        if client.sessions.current_user is None:
            email = input("Email: ")
            password = getpass.getpass("Password: ")

            result = await client.login(email, password)
            if not result.success:
                print(f"Login failed: {result.message}")
                return
            print("Login successful")

        user = client.sessions.current_user
        print(f"Signed in as {user.name} <{user.email}>")

        # Where may this user go?
        decision = client.gate()
        if decision.outcome == GateOutcome.ALLOW:
            print(f"Opening the {decision.area.value} area")
        else:
            print(f"Access denied: {decision.reason}")

        profile = await client.api.get_my_profile()
        print(f"Profile lookup: {'ok' if profile.success else profile.message}")

        if input("Sign out? [y/N] ").strip().lower() == "y":
            await client.logout()
            print("Signed out")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
