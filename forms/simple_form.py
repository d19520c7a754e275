# forms/simple_form.py
from flask_wtf import FlaskForm
from markupsafe import Markup
from wtforms import (
    EmailField, Field, Form, FormField, PasswordField, SelectField, StringField, SubmitField,
)
from wtforms.validators import DataRequired, EqualTo, Length, Optional

from services.form_fields import FieldKind


class StaticLabelWidget(object):
    def __call__(self, field, **kwargs):
        return Markup('<div class="form-item">%s</div>') % Markup(field.markup)


class StaticLabelField(Field):
    """入力を持たない表示専用の項目。送信値は無視する。"""
    widget = StaticLabelWidget()

    def __init__(self, label=None, markup="", **kwargs):
        super().__init__(label, **kwargs)
        self.markup = markup

    def process_formdata(self, valuelist):
        pass


def _validators(definition):
    if definition.required:
        return [DataRequired(), Length(max=255)]
    return [Optional(), Length(max=255)]


def _render_kw(definition):
    render_kw = {}
    if definition.css_classes:
        render_kw["class"] = " ".join(definition.css_classes)
    if definition.size:
        render_kw["size"] = definition.size
    return render_kw or None


def _make_fields(definition):
    """FieldDefinition 1件から WTForms のフィールド（name -> UnboundField）を作る。"""
    kind = definition.kind
    common = dict(description=definition.description, render_kw=_render_kw(definition))

    if kind is FieldKind.TEXT:
        return {definition.name: StringField(
            definition.label, validators=_validators(definition),
            default=definition.default_value, **common)}
    if kind is FieldKind.EMAIL:
        return {definition.name: EmailField(
            definition.label, validators=_validators(definition),
            default=definition.default_value, **common)}
    if kind is FieldKind.SELECT:
        # 選択肢外の値は SelectField 自身が弾く
        return {definition.name: SelectField(
            definition.label, choices=list(definition.options.items()), coerce=int,
            default=definition.default_value, **common)}
    if kind is FieldKind.PASSWORD_CONFIRM:
        confirm_name = f"{definition.name}_confirm"
        return {
            definition.name: PasswordField(
                definition.label,
                validators=[DataRequired(), EqualTo(confirm_name, message="パスワードが一致しません。")],
                **common),
            confirm_name: PasswordField(f"{definition.label}（確認）", validators=[DataRequired()]),
        }
    if kind is FieldKind.STATIC_LABEL:
        return {definition.name: StaticLabelField(markup=definition.markup)}
    if kind is FieldKind.SUBMIT:
        return {definition.name: SubmitField(definition.label)}
    raise ValueError(f"unsupported field kind: {kind}")


def build_simple_form_class(definitions, groups=()):
    """
    フィールド定義の並び順どおりに FlaskForm のサブクラスを組み立てる。
    group が付いた定義はサブフォーム（FormField）にまとめ、最初に現れた位置に置く。
    """
    group_meta = {g.name: g for g in groups}
    group_fields = {}
    for definition in definitions:
        if definition.group:
            group_fields.setdefault(definition.group, {}).update(_make_fields(definition))

    attrs = {}
    for definition in definitions:
        if not definition.group:
            attrs.update(_make_fields(definition))
            continue
        if definition.group in attrs:
            continue
        meta = group_meta.get(definition.group)
        subform = type(f"{definition.group.title().replace('_', '')}Form", (Form,), group_fields[definition.group])
        attrs[definition.group] = FormField(
            subform,
            label=meta.label if meta else definition.group,
            description=meta.description if meta else "",
        )

    return type("SimpleForm", (FlaskForm,), attrs)


def submission_input(form):
    """検証サービスに渡す生の値（文字列）を取り出す。"""
    return {
        "title": form.title.data or "",
        "color": "" if form.color.data is None else str(form.color.data),
        "user_email": form.user_email.data or "",
        "username": form.username.data or "",
    }
