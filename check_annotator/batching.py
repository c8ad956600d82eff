# batching.py - split findings into groups the Checks API accepts

# The Checks API rejects more than 50 annotations per update request.
MAX_ANNOTATIONS_PER_REQUEST = 50


def batch(max_size, items):
    """Return consecutive groups of at most `max_size` items, in order.

    An empty input gives a single empty group, so callers always have at
    least one batch to publish.
    """
    if max_size < 1:
        raise ValueError(f'max_size must be positive, got {max_size}')
    items = list(items)
    groups = [items[i:i + max_size] for i in range(0, len(items), max_size)]
    return groups or [[]]
