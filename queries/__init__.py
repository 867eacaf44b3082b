"""
queries/ - Query Builders
=========================
Pure functions that assemble parameterized SQL for searches whose shape
depends on user input. They never touch a connection.
"""
