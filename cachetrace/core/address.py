"""Address decoding for the trace simulator.

Geometry is fixed: a 32 unit cache built from 4 unit blocks, so every
configuration holds NUM_BLOCKS lines regardless of associativity.

- tag = address // NUM_BLOCKS (global block count, same for every config)
- set_index = (address // BLOCK_SIZE) % num_sets
"""

CACHE_SIZE = 32
BLOCK_SIZE = 4
NUM_BLOCKS = CACHE_SIZE // BLOCK_SIZE
ADDRESS_BITS = 32
ADDRESS_MASK = (1 << ADDRESS_BITS) - 1


def tag_of(address: int, total_blocks: int = NUM_BLOCKS) -> int:
    # the tag width does not depend on num_sets; comparisons across
    # configurations stay fair because total capacity is constant
    return address // total_blocks


def set_index_of(address: int, num_sets: int, block_size: int = BLOCK_SIZE) -> int:
    return (address // block_size) % num_sets


def decode(address: int, num_sets: int):
    """Decode address into (set_index, tag)."""
    return set_index_of(address, num_sets), tag_of(address)
