"""
Code for schema objects.

.. currentmodule:: veggies.schema

.. autosummary::
    :toctree:

    table
    column
    index
    relationship

    types

"""
