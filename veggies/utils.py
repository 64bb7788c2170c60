"""
Miscellaneous utilities used throughout the library.
"""
import typing


class Proxy(object):
    """
    Base class for a proxy object.

    Takes the object to proxy through as it's first argument, and proxies all getattr access to
    that object.
    """
    def __init__(self, to_proxy: object):
        self.obb = to_proxy

    def __getattr__(self, item):
        # obb may not be set yet during unpickling etc
        if item == "obb":
            raise AttributeError(item)

        return getattr(self.obb, item)


def merge_info(defaults: dict, info: typing.Optional[dict]) -> dict:
    """
    Merges a column info mapping over some defaults.

    Values in ``info`` win. Neither mapping is modified.
    """
    merged = dict(defaults)
    merged.update(info or {})
    return merged
