class MalformedTreeError(ValueError):
    """The parse tree handed to the structuring passes has the wrong shape.

    Raised by the input parser contract, never by structural anomalies in
    otherwise well-formed content.
    """
