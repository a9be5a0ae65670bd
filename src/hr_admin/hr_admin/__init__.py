"""HR Admin package.

Feature modules (employees, departments, users) sit on a thin Flask controller
layer and service/repository layers. Every form goes through the same pipeline
in :mod:`.forms`: extract raw fields, validate against a declarative schema,
echo failures back as a 400 response, and bind the result to inputs.
"""
