def weighted_random(weights, rng):
    """
    Pick a key of `weights` with a roulette walk.

    The draw is uniform in [0, 1) and is compared against the running sum
    of the raw scores; the scores are not normalised first. When the whole
    sum stays below the draw, the key with the highest score wins, ties
    going to the first one in iteration order.

    Parameters
    ----------
    weights : dict
        key -> non-negative score, walked in insertion order
    rng : numpy.random.Generator
        Anything with a random() method returning a float in [0, 1)
    """
    if not weights:
        raise ValueError("cannot sample from an empty weight map")

    r = rng.random()
    cum = 0.0

    for key, w in weights.items():
        cum += w
        if r <= cum:
            return key

    top = max(weights.values())
    for key, w in weights.items():
        if w == top:
            return key


def sample(items, rng):
    """Uniformly random element of a non-empty sequence."""
    return items[int(rng.integers(len(items)))]
