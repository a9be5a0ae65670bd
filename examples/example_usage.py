"""Example: the form pipeline without a browser.

A schema validates a raw submission, the failure becomes a response, and a
context/binder pair turns that response back into input props.
"""

from src.hr_admin.hr_admin.employees.schemas import CreateEmployeeSchema
from src.hr_admin.hr_admin.forms import Failure, FormBinder, SubmissionContext, process_bad_request


def main():
    fields = {"firstName": "Al", "lastName": "Smith", "phone": "123456", "email": "al@x.io", "managerId": ""}
    result = CreateEmployeeSchema.validate(fields)
    if isinstance(result, Failure):
        response = process_bad_request(result, fields)
        print(response.to_json())

        form = FormBinder(CreateEmployeeSchema, SubmissionContext.from_response(response))
        for props in form.fields():
            print(f"{props.name:<10} value={props.value!r:<12} errors={props.errors}")


if __name__ == "__main__":
    main()
