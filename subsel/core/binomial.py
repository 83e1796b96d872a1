from scipy.special import comb


def binomial(n, k):
    """Exact binomial coefficient (n choose k) as an unbounded int.

    Returns 0 for k outside [0, n].
    """
    if k < 0 or k > n:
        return 0
    return int(comb(n, k, exact=True))
