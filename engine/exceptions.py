# engine/exceptions.py

class SeriesLensError(Exception):
    pass


class InvalidParameter(SeriesLensError, ValueError):
    pass
