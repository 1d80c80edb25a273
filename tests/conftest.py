# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.

import random
import typing
import logging
import pytest


_logger = logging.getLogger(__name__)


@pytest.fixture()  # type: ignore
def rng() -> random.Random:
    """
    Deterministic source of randomness so that a failing property test can be reproduced.
    """
    seed = 0xB1EC
    _logger.debug("Random seed: %r", seed)
    return random.Random(seed)


def random_payload(rng: random.Random, max_size: int) -> bytes:
    size = rng.randint(0, max_size)
    return bytes(rng.getrandbits(8) for _ in range(size))


@pytest.fixture()  # type: ignore
def payload_factory(rng: random.Random) -> typing.Callable[[int], bytes]:
    return lambda max_size: random_payload(rng, max_size)
