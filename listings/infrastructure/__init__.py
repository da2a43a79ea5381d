"""Infrastructure module.

Configuration, database, session store, security primitives, logging
and the company account model.
"""
