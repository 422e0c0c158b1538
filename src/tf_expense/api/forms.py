"""Multipart form dependencies for expense create/update.

The text fields arrive as individual form parts next to the receipt file,
so they are collected here and validated through the pydantic request
models. Failures are re-raised as RequestValidationError so they reach the
same 400 handler as JSON body errors.
"""

from typing import Annotated, Any

from fastapi import Form
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from src.tf_expense.application.schemas import ExpenseCreateForm, ExpenseUpdateForm


def _validate(model: type[BaseModel], values: dict[str, Any]) -> Any:
    provided = {k: v for k, v in values.items() if v is not None}
    try:
        return model.model_validate(provided)
    except ValidationError as exc:
        errors = [{**e, "loc": ("body", *e["loc"])} for e in exc.errors(include_url=False)]
        raise RequestValidationError(errors) from None


async def expense_create_form(
    description: Annotated[str | None, Form()] = None,
    amount: Annotated[str | None, Form()] = None,
    date: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    account_id: Annotated[str | None, Form()] = None,
) -> ExpenseCreateForm:
    return _validate(
        ExpenseCreateForm,
        {
            "description": description,
            "amount": amount,
            "date": date,
            "category": category,
            "account_id": account_id,
        },
    )


async def expense_update_form(
    description: Annotated[str | None, Form()] = None,
    amount: Annotated[str | None, Form()] = None,
    date: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
) -> ExpenseUpdateForm:
    return _validate(
        ExpenseUpdateForm,
        {
            "description": description,
            "amount": amount,
            "date": date,
            "category": category,
        },
    )
