"""HTML bodies for order emails."""

from datetime import datetime
from html import escape

from printshop.models.order import Order

_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_HEADER_STYLE = (
    "background: linear-gradient(135deg, #2c5aa0 0%, #1e3d6f 100%); color: white; "
    "padding: 30px 20px; text-align: center; border-radius: 10px 10px 0 0;"
)
_SECTION_STYLE = (
    "background: white; padding: 20px; margin: 15px 0; border-radius: 8px; "
    "border-left: 4px solid #2c5aa0;"
)
_TOTAL_STYLE = (
    "font-size: 20px; font-weight: bold; color: #2c5aa0; background: #f0f4ff; "
    "padding: 15px; border-radius: 6px; text-align: center; margin: 20px 0;"
)


def _row(label: str, value: object) -> str:
    return (
        '<tr><td style="font-weight: 600; color: #555; padding: 6px 12px 6px 0;">'
        f"{escape(label)}</td><td>{escape(str(value))}</td></tr>"
    )


def _section(title: str, rows: list[str]) -> str:
    return (
        f'<div style="{_SECTION_STYLE}"><h3 style="color: #2c5aa0; margin-top: 0;">{escape(title)}</h3>'
        f'<table style="width: 100%; border-collapse: collapse;">{"".join(rows)}</table></div>'
    )


def _format_timestamp(value: str) -> str:
    return datetime.fromisoformat(value).strftime("%d.%m.%Y %H:%M")


def render_admin_email(order: Order, admin_panel_url: str) -> str:
    """Render the operator alert for a new order.

    Args:
        order: The created order.
        admin_panel_url: Link to the order management page.

    Returns:
        str: HTML document.
    """
    product = order["product"]
    customer = order["customer"]
    design = order["design"]
    pricing = order["pricing"]

    customer_rows = [
        _row("Имя:", customer["full_name"]),
        _row("Email:", customer["email"]),
        _row("Телефон:", customer["phone"]),
        _row("Город:", customer["city"]),
        _row("Адрес:", customer["address"]),
    ]
    if customer["notes"]:
        customer_rows.append(_row("Комментарии:", customer["notes"]))

    sections = [
        _section(
            "Информация о товаре",
            [
                _row("Тип товара:", product["name"]),
                _row("Цвет:", product["color_name"]),
                _row("Размер:", product["size"]),
                _row("Базовая цена:", f"{product['price']} ₽"),
                _row("Статус:", order["status"]),
            ],
        ),
        _section("Информация о клиенте", customer_rows),
        _section(
            "Стоимость заказа",
            [
                _row("Товар:", f"{pricing['product_price']} ₽"),
                _row("Печать дизайна:", f"{pricing['printing_cost']} ₽"),
                _row("Доставка:", f"{pricing['shipping_cost']} ₽"),
            ],
        ),
        f'<div style="{_TOTAL_STYLE}">ИТОГО: {pricing["total_price"]} ₽</div>',
        _section(
            "Файл дизайна",
            [
                _row("Имя файла:", design["original_name"]),
                _row("Размер:", f"{design['size'] / 1024 / 1024:.2f} МБ"),
                _row("Тип файла:", design["mimetype"]),
                _row("Загружен:", _format_timestamp(design["uploaded_at"])),
            ],
        ),
        _section(
            "Информация о заказе",
            [
                _row("ID заказа:", order["id"]),
                _row("Номер заказа:", order["order_number"]),
                _row("Дата создания:", _format_timestamp(order["created_at"])),
            ],
        ),
    ]

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Новый заказ {escape(order["order_number"])}</title>
</head>
<body style="{_BODY_STYLE}">
    <div style="{_HEADER_STYLE}">
        <h1 style="margin: 0; font-size: 24px;">Новый заказ</h1>
        <div style="font-size: 14px; opacity: 0.9;">{escape(order["order_number"])}</div>
    </div>
    <div style="background: #f8f9fa; padding: 20px;">
        {"".join(sections)}
        <p><strong>Файл дизайна прикреплен к этому письму.</strong></p>
    </div>
    <div style="text-align: center; padding: 20px; font-size: 14px; color: #666;">
        <p><strong>Требуется обработка!</strong> Заказ ожидает проверки дизайна.</p>
        <p><a href="{escape(admin_panel_url)}">Перейти к заказу</a></p>
    </div>
</body>
</html>
"""


def render_customer_email(order: Order, estimated_delivery: str, support_email: str) -> str:
    """Render the confirmation sent to the customer."""
    product = order["product"]
    customer = order["customer"]

    details = _section(
        "Детали заказа",
        [
            _row("Товар:", product["name"]),
            _row("Цвет:", product["color_name"]),
            _row("Размер:", product["size"]),
            _row("Адрес доставки:", f"{customer['city']}, {customer['address']}"),
        ],
    )
    info = _section(
        "Информация о заказе",
        [
            _row("Номер заказа:", order["order_number"]),
            _row("Дата создания:", _format_timestamp(order["created_at"])),
            _row("Статус:", "Ожидает проверки"),
        ],
    )

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Подтверждение заказа {escape(order["order_number"])}</title>
</head>
<body style="{_BODY_STYLE}">
    <div style="{_HEADER_STYLE}">
        <h1 style="margin: 0; font-size: 24px;">Спасибо за ваш заказ!</h1>
        <p>Заказ {escape(order["order_number"])} принят в обработку</p>
    </div>
    <div style="background: #f8f9fa; padding: 20px;">
        <p>Здравствуйте, <strong>{escape(customer["full_name"])}</strong>!</p>
        <p>Мы получили ваш заказ на кастомный товар и приступили к его обработке.</p>
        {details}
        <div style="{_TOTAL_STYLE}">Общая стоимость: {order["pricing"]["total_price"]} ₽</div>
        <div style="{_SECTION_STYLE}">
            <h3 style="color: #2c5aa0; margin-top: 0;">Что дальше</h3>
            <ul>
                <li>Мы проверим ваш дизайн в течение 24 часов</li>
                <li>При необходимости свяжемся с вами для уточнений</li>
                <li>Изготовление займет 3-5 рабочих дней</li>
                <li>Предполагаемая дата доставки: <strong>{escape(estimated_delivery)}</strong></li>
            </ul>
        </div>
        {info}
        <p>Мы будем сообщать о каждом этапе выполнения заказа на <strong>{escape(customer["email"])}</strong>.
        По всем вопросам пишите на <a href="mailto:{escape(support_email)}">{escape(support_email)}</a>.</p>
    </div>
</body>
</html>
"""
