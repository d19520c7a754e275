# simple_controller.py
import logging
import time

from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_login import current_user

from forms.simple_form import build_simple_form_class, submission_input
from services.collaborators import (
    DatastoreError, EmailSyntaxValidator, FlaskLoginUserProvider, SqlAlchemyDatastore,
)
from services.submission_service import FORM_ID, FormSubmissionService, Identity

logger = logging.getLogger(__name__)

simple_bp = Blueprint("simple_form", __name__)


def _build_service() -> FormSubmissionService:
    return FormSubmissionService(
        datastore=SqlAlchemyDatastore(),
        user_provider=FlaskLoginUserProvider(),
        email_validator=EmailSyntaxValidator(),
    )


def _attach_errors(form, errors):
    for err in errors:
        field = getattr(form, err.field, None)
        if field is None:
            continue
        # 二重表示を避ける
        if err.message not in field.errors:
            field.errors = list(field.errors) + [err.message]


def _render(form, sv):
    return render_template(
        "simple/form.html",
        form=form,
        form_id=FORM_ID,
        groups=sv.describe_groups(),
    )


@simple_bp.route("/", methods=["GET", "POST"])
def index():
    sv = _build_service()
    form_class = build_simple_form_class(sv.describe_fields(), sv.describe_groups())
    form = form_class()

    if not form.is_submitted():
        return _render(form, sv)

    data = submission_input(form)
    if not form.validate():
        # 必須チェック等で落ちた場合もタイトル・メールの検証結果は併せて表示する
        _attach_errors(form, sv.validate(data))
        return _render(form, sv)

    identity = Identity(
        user_id=sv.user_provider.get_user_id(),
        account_name=sv.user_provider.get_account_name(),
    )
    try:
        result = sv.submit(
            data,
            identity=identity,
            client_ip=request.remote_addr or "",
            now=int(time.time()),
        )
    except DatastoreError:
        logger.exception("failed to store submission (user=%s)", identity.user_id)
        flash("送信内容の保存に失敗しました。時間をおいて再度お試しください。", "danger")
        return _render(form, sv)

    if not result.ok:
        _attach_errors(form, result.errors)
        return _render(form, sv)

    flash("フォームを送信しました。", "success")
    logger.info(
        "New simple form entry from user %s inserted: %s.",
        result.record.username,
        result.record.title,
    )
    return redirect(url_for("simple_form.done"))


@simple_bp.route("/done", methods=["GET"])
def done():
    return render_template("simple/done.html", user=current_user)
