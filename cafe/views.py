from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from aws_lib.dynamodb_client import StoreError

from .apps import get_session
from .board import Board
from .forms import AdvanceStatusForm, OrderForm
from .menu import SET_PRICE, format_won, summary_lines, total
from .models import InvalidTransition, OrderStatus
from .services import OrderNotFound

NOT_CONNECTED_MESSAGE = "서버 연결이 되지 않았습니다.\n인터넷 연결을 확인해주세요."
UPDATE_FAILED_MESSAGE = "상태 업데이트에 실패했습니다. 다시 시도해주세요."

ADVANCED_MESSAGES = {
    OrderStatus.MADE: "{n}번 주문 제조 완료 처리되었습니다!",
    OrderStatus.SERVED: "{n}번 주문 서빙 완료 처리되었습니다!",
}


@require_GET
def home(request):
    """Tablet start page: pick the customer or the kitchen screen."""
    return render(request, "cafe/home.html")


# customer screen
def _order_context(form, connection, confirming=False):
    cart = form.cleaned_data["cart"] if form.is_bound and form.is_valid() else {}
    return {
        "form": form,
        "drinks": form.menu_rows("drinks"),
        "snacks": form.menu_rows("snacks"),
        "set_price": format_won(SET_PRICE),
        "summary": summary_lines(cart),
        "total": format_won(total(cart)),
        "confirming": confirming,
        "connection": connection,
    }


def place_order(request):
    """
    GET shows the menu. POST:
    1. Refuses while DynamoDB is unreachable
    2. Shows the "주문 확인" step with items and total
    3. On confirmation, allocates an order number and saves the order
    """
    session = get_session()

    if request.method != "POST":
        session.connection.check()
        return render(request, "cafe/order.html", _order_context(OrderForm(), session.connection))

    form = OrderForm(request.POST)
    action = request.POST.get("action", "review")
    confirming = False
    if not session.connection.check():
        messages.error(request, NOT_CONNECTED_MESSAGE)
    elif not form.is_valid():
        for error in form.error_messages_for_display():
            messages.error(request, error)
    elif action == "review":
        confirming = True
    elif action == "confirm":
        try:
            order = session.orders.place_order(form.cleaned_data["cart"])
        except StoreError as e:
            messages.error(request, str(e))
        else:
            messages.success(
                request,
                f"주문번호: {order.order_number}번\n"
                f"총 금액: {format_won(order.total_amount)}\n\n"
                "주문번호를 기억해주세요!",
            )
            return redirect("place_order")

    return render(request, "cafe/order.html", _order_context(form, session.connection, confirming))


@require_GET
def quote(request):
    """Running total for the quantities currently entered."""
    form = OrderForm(request.GET)
    if form.is_valid():
        cart = form.cleaned_data["cart"]
    elif form.non_field_errors():
        # Nothing selected yet
        cart = {}
    else:
        return JsonResponse(
            {"errors": list(form.error_messages_for_display())},
            status=400,
            json_dumps_params={"ensure_ascii": False},
        )

    amount = total(cart)
    return JsonResponse({
        "total": amount,
        "formatted": format_won(amount),
        "summary": summary_lines(cart),
    }, json_dumps_params={"ensure_ascii": False})


# kitchen screen
@require_GET
def kitchen(request):
    """Three columns: pending, made and served."""
    session = get_session()
    try:
        board = session.orders.board()
    except StoreError as e:
        messages.error(request, str(e))
        board = Board()

    session.connection.check()
    return render(request, "cafe/kitchen.html", {
        "board": board,
        "columns": board.columns(),
        "counts": board.counts(),
        "connection": session.connection,
        "updated_at": timezone.localtime().strftime("%H:%M"),
    })


@require_GET
def board_json(request):
    """Polled by the kitchen tablet to re-render on every change."""
    try:
        board = get_session().orders.board()
    except StoreError as e:
        return JsonResponse({"error": str(e)}, status=503)

    return JsonResponse({
        "counts": board.counts(),
        "orders": board.as_dict(),
    }, json_dumps_params={"ensure_ascii": False})


@require_POST
def advance_order(request, order_number):
    form = AdvanceStatusForm(request.POST)
    if not form.is_valid():
        messages.error(request, UPDATE_FAILED_MESSAGE)
        return redirect("kitchen")

    target = OrderStatus(form.cleaned_data["status"])
    try:
        get_session().orders.advance(order_number, target)
    except (InvalidTransition, OrderNotFound) as e:
        messages.error(request, str(e))
    except StoreError:
        messages.error(request, UPDATE_FAILED_MESSAGE)
    else:
        messages.success(request, ADVANCED_MESSAGES[target].format(n=order_number))

    return redirect("kitchen")


@require_GET
def connection_status(request):
    connection = get_session().connection
    connection.check()
    return JsonResponse({
        "connected": connection.is_connected,
        "status": connection.status_text,
    }, json_dumps_params={"ensure_ascii": False})
