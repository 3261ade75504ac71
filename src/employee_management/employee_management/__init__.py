"""Employee Management package.

Organized by feature modules (employees, leaves, reports) with a thin Flask
JSON controller layer on top of service/repository layers. The leave and
report rule engines are pure and take the current instant as an argument.
"""
