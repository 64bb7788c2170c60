"""
Sentinel objects.
"""


class Sentinel(object):
    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return "<{}>".format(self.name)

    def __bool__(self):
        return False


#: Marks a column as having no client-side default.
NO_DEFAULT = Sentinel("NO_DEFAULT")
