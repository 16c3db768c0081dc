"""Constants and helpers shared by the test modules."""

import asyncio

SECRET = "This is a very secure secret and I will get mad if you think otherwise."
VALUE = b"Try to steal me. I dare you."
AAD = b"Some additional data, like a userId, a random secret or something"


def run(coro):
    """Drive a coroutine to completion."""
    return asyncio.run(coro)
