# services/submission_service.py
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from services.collaborators import CurrentUserProvider, Datastore, EmailFormatValidator
from services.form_fields import FieldDefinition, FieldGroup, FieldKind


logger = logging.getLogger(__name__)

FORM_ID = "forcontu_forms_simple"
SUBMISSIONS_TABLE = "submissions"

TITLE_MIN_LENGTH = 5
CLIENT_IP_MAX_LENGTH = 128

COLOR_OPTIONS: Dict[int, str] = {
    0: "Black",
    1: "Red",
    2: "Blue",
    3: "Green",
    4: "Orange",
    5: "White",
}
DEFAULT_COLOR = 2

FIELD_GROUPS: Tuple[FieldGroup, ...] = (
    FieldGroup(
        name="personal_data",
        label="個人情報",
        description="氏名を入力してください。",
    ),
    FieldGroup(
        name="access_data",
        label="アクセス情報",
        description="ログインに使うメールアドレスとパスワードを入力してください。",
    ),
)

SubmissionInput = Mapping[str, Any]


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


@dataclass(frozen=True)
class Identity:
    user_id: int
    account_name: str = ""


@dataclass(frozen=True)
class SubmissionRecord:
    title: str
    color: int
    username: str
    email: str
    submitting_user_id: int
    client_ip: str
    submitted_at: int
    id: Optional[int] = None

    def to_columns(self) -> Dict[str, Any]:
        """テーブルのカラム名に合わせた dict を返す（id は採番されるので含めない）。"""
        return {
            "title": self.title,
            "color": self.color,
            "username": self.username,
            "email": self.email,
            "uid": self.submitting_user_id,
            "ip": self.client_ip,
            "timestamp": self.submitted_at,
        }


@dataclass(frozen=True)
class SubmissionResult:
    record: Optional[SubmissionRecord] = None
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.record is not None and not self.errors


def _text(data: SubmissionInput, name: str) -> str:
    value = data.get(name)
    return "" if value is None else str(value)


def _parse_color(value: Any) -> int:
    # 未指定・数値でない・選択肢外はすべて既定値
    try:
        color = int(value)
    except (TypeError, ValueError):
        return DEFAULT_COLOR
    if color not in COLOR_OPTIONS:
        return DEFAULT_COLOR
    return color


class FormSubmissionService(object):
    """
    シンプルフォームの「定義 → 検証 → 保存」を担当するサービス。
    リクエスト情報（IP・時刻・ユーザー）は引数で受け取り、グローバル状態は参照しない。
    """

    def __init__(
        self,
        datastore: Datastore,
        user_provider: CurrentUserProvider,
        email_validator: EmailFormatValidator,
    ) -> None:
        self.datastore = datastore
        self.user_provider = user_provider
        self.email_validator = email_validator

    def describe_fields(self) -> Tuple[FieldDefinition, ...]:
        return (
            FieldDefinition(
                name="title",
                kind=FieldKind.TEXT,
                label="タイトル",
                required=True,
                description=f"タイトルは{TITLE_MIN_LENGTH}文字以上で入力してください。",
            ),
            FieldDefinition(
                name="color",
                kind=FieldKind.SELECT,
                label="色",
                options=dict(COLOR_OPTIONS),
                default_value=DEFAULT_COLOR,
                description="色を選択してください。",
            ),
            FieldDefinition(
                name="user_email",
                kind=FieldKind.EMAIL,
                label="メールアドレス",
                required=True,
                description="あなたのメールアドレス。",
                css_classes=("highlighted", "forcontu"),
            ),
            FieldDefinition(
                name="first_name",
                kind=FieldKind.TEXT,
                label="名",
                required=True,
                group="personal_data",
                size=40,
            ),
            FieldDefinition(
                name="last_name",
                kind=FieldKind.TEXT,
                label="姓",
                required=True,
                group="personal_data",
                size=40,
            ),
            FieldDefinition(
                name="access_data_email",
                kind=FieldKind.EMAIL,
                label="メールアドレス",
                required=True,
                group="access_data",
            ),
            FieldDefinition(
                name="password",
                kind=FieldKind.PASSWORD_CONFIRM,
                label="パスワード",
                required=True,
                group="access_data",
            ),
            FieldDefinition(
                name="username",
                kind=FieldKind.TEXT,
                label="ユーザー名",
                required=True,
                default_value=self.user_provider.get_account_name(),
                description="あなたのユーザー名。",
            ),
            FieldDefinition(
                name="comment",
                kind=FieldKind.STATIC_LABEL,
                markup="フォームの中に <strong>HTML を表示する</strong> ための項目です。",
            ),
            FieldDefinition(
                name="submit",
                kind=FieldKind.SUBMIT,
                label="送信",
            ),
        )

    def describe_groups(self) -> Tuple[FieldGroup, ...]:
        return FIELD_GROUPS

    def validate(self, data: SubmissionInput) -> List[ValidationError]:
        """タイトル長とメールアドレス形式を検証する。両方のルールを必ず評価する。"""
        errors: List[ValidationError] = []

        title = _text(data, "title")
        if len(title) < TITLE_MIN_LENGTH:
            errors.append(ValidationError(
                "title", f"タイトルは{TITLE_MIN_LENGTH}文字以上で入力してください。"))

        email = _text(data, "user_email")
        if not self.email_validator.is_valid(email):
            errors.append(ValidationError(
                "user_email", f"{email} は有効なメールアドレスではありません。"))

        return errors

    def submit(
        self,
        data: SubmissionInput,
        identity: Identity,
        client_ip: str,
        now: int,
    ) -> SubmissionResult:
        """
        検証を通った入力だけを1件保存する。
        - 検証エラーがあれば保存せずにエラーを返す
        - Datastore の失敗（DatastoreError）はそのまま呼び出し側へ送出する
        """
        errors = self.validate(data)
        if errors:
            logger.debug("submission rejected: %s", [e.field for e in errors])
            return SubmissionResult(errors=errors)

        record = SubmissionRecord(
            title=_text(data, "title"),
            color=_parse_color(data.get("color", DEFAULT_COLOR)),
            username=_text(data, "username"),
            email=_text(data, "user_email"),
            submitting_user_id=max(int(identity.user_id or 0), 0),
            client_ip=(client_ip or "")[:CLIENT_IP_MAX_LENGTH],
            submitted_at=int(now),
        )
        assigned_id = self.datastore.insert(SUBMISSIONS_TABLE, record.to_columns())
        return SubmissionResult(record=dataclasses.replace(record, id=assigned_id))
