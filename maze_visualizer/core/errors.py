class MazeContractError(RuntimeError):
    """
    The shared grid is in a state no algorithm could have produced,
    e.g. a parent link that is not grid-adjacent. Not recoverable.
    """
