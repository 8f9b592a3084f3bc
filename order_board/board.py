"""
Console board for one staff role

BoardController parses one command line at a time and returns a structured
result; run_board() wires it to stdin, a synchronizer and terminal output.
"""
import asyncio
import sys
from typing import Any, Dict, List, Optional

from order_board.exceptions import OrderBoardError
from order_board.logging_config import setup_logging, get_logger
from order_board.models.order import epoch_ms
from order_board.schemas.order import OrderResponse, OrderStatus, StaffRole
from order_board.services.assembly import OrderAssemblySession
from order_board.store import build_order_store
from order_board.sync.roles import SYNCHRONIZERS
from order_board.sync.synchronizer import RoleSynchronizer

logger = get_logger(__name__)

ACTIONS = {
    StaffRole.KITCHEN: {"start": OrderStatus.PREPARING, "ready": OrderStatus.READY},
    StaffRole.WAITER: {"served": OrderStatus.SERVED},
    StaffRole.CASHIER: {"paid": OrderStatus.PAID, "cancel": OrderStatus.CANCELLED},
}

TITLES = {
    StaffRole.KITCHEN: "Kitchen - orders to prepare",
    StaffRole.WAITER: "Waiter - orders ready to serve",
    StaffRole.CASHIER: "Cashier - open orders",
}

SHORT_ID = 6


def _format_table(headers: List[str], rows: List[List[str]]) -> str:
    widths = [len(h) for h in headers]
    for r in rows:
        for i, cell in enumerate(r):
            widths[i] = max(widths[i], len(cell))

    def fmt_row(cols: List[str]) -> str:
        return " | ".join(col.ljust(widths[i]) for i, col in enumerate(cols))

    sep = "-+-".join("-" * w for w in widths)
    return "\n".join([fmt_row(headers), sep] + [fmt_row(r) for r in rows])


def render_board(title: str, orders: List[OrderResponse], now: Optional[int] = None) -> str:
    """Render orders as a text table; waiting time counts from the last status change"""
    now = epoch_ms() if now is None else now
    if not orders:
        return f"{title}\n<no orders>"
    rows = []
    for order in orders:
        waiting = max(0, (now - order.updated_at) // 60000)
        lines = ", ".join(f"{line.quantity}x {line.product_name}" for line in order.items)
        rows.append([
            order.table_identifier,
            order.id[:SHORT_ID],
            order.status.value,
            f"{waiting} min",
            lines,
            order.notes or "",
        ])
    return f"{title}\n" + _format_table(["Table", "Order", "Status", "Waiting", "Items", "Notes"], rows)


def render_cart(session: OrderAssemblySession) -> str:
    if session.is_empty:
        cart = "<empty cart>"
    else:
        cart = "\n".join(
            f"  {line.quantity}x {line.name or line.product_id}" for line in session.lines
        )
    return (
        f"Table: {session.table_identifier or '-'}\n"
        f"{cart}\n"
        f"Notes: {session.notes or '-'}\n"
        f"Estimated total: {session.preview_total():.2f}"
    )


class BoardController:
    """Command handling for a role board"""

    def __init__(self, synchronizer: RoleSynchronizer, session: Optional[OrderAssemblySession] = None):
        self.synchronizer = synchronizer
        self.role = synchronizer.profile.role
        self.session = session
        self.actions = dict(ACTIONS.get(self.role, {}))

    def render(self, now: Optional[int] = None) -> str:
        return render_board(TITLES.get(self.role, self.role.value), self.synchronizer.orders, now)

    def resolve_order(self, prefix: str) -> OrderResponse:
        matches = [o for o in self.synchronizer.orders if o.id.startswith(prefix)]
        if not matches:
            raise OrderBoardError(f"No order on this board starts with '{prefix}'")
        if len(matches) > 1:
            raise OrderBoardError(f"Order prefix '{prefix}' is ambiguous")
        return matches[0]

    async def handle_cmd(self, line: str) -> Dict[str, Any]:
        """Parse and run one command line; never prints"""
        parts = (line or "").strip().split()
        if not parts:
            return {"ok": False, "cmd": "", "error": "empty command", "usage": self.help_text()}
        cmd = parts[0].lower()
        args = parts[1:]

        try:
            if cmd in ("help", "h", "?"):
                return {"ok": True, "cmd": cmd, "data": self.help_text()}
            if cmd in ("exit", "quit"):
                return {"ok": True, "cmd": cmd, "data": {"exit": True}}
            if cmd in ("refresh", "r"):
                await self.synchronizer.refresh()
                return {"ok": True, "cmd": cmd, "data": self.render()}
            if self.session is not None and cmd in ("add", "qty", "rm", "table", "note", "cart", "submit"):
                return await self._handle_cart(cmd, args, line)
            if len(args) == 1:
                return await self._handle_action(cmd, args[0].lower())
        except (OrderBoardError, ValueError) as e:
            return {"ok": False, "cmd": cmd, "error": str(e)}

        return {"ok": False, "cmd": cmd, "error": f"unknown command: {line.strip()}", "usage": self.help_text()}

    async def _handle_action(self, prefix: str, action: str) -> Dict[str, Any]:
        status = self.actions.get(action)
        if status is None:
            status = OrderStatus(action)
        order = self.resolve_order(prefix)
        updated = await self.synchronizer.transition(order.id, status)
        return {"ok": True, "cmd": action, "data": {"order_id": updated.id, "status": updated.status.value}}

    async def _handle_cart(self, cmd: str, args: List[str], line: str) -> Dict[str, Any]:
        session = self.session
        if cmd == "add":
            if not args:
                raise OrderBoardError("usage: add <product-id> [quantity]")
            session.add_product(args[0], int(args[1]) if len(args) > 1 else 1)
        elif cmd == "qty":
            if len(args) != 2:
                raise OrderBoardError("usage: qty <product-id> <quantity>")
            session.set_quantity(args[0], int(args[1]))
        elif cmd == "rm":
            if not args:
                raise OrderBoardError("usage: rm <product-id>")
            session.remove_product(args[0])
        elif cmd == "table":
            if not args:
                raise OrderBoardError("usage: table <name>")
            session.set_table(args[0])
        elif cmd == "note":
            session.set_notes(line.strip()[len(cmd):].strip())
        elif cmd == "submit":
            order_id = await session.submit()
            await self.synchronizer.poll()
            return {"ok": True, "cmd": cmd, "data": {"order_id": order_id}}
        return {"ok": True, "cmd": cmd, "data": render_cart(session)}

    def help_text(self) -> str:
        lines = ["Commands:"]
        for action, status in self.actions.items():
            lines.append(f"  <order> {action:<8} - mark order {status.value}")
        if self.session is not None:
            lines += [
                "  add <product> [n]  - add product to cart",
                "  qty <product> <n>  - set quantity (0 removes)",
                "  rm <product>       - remove product",
                "  table <name>       - select table",
                "  note <text>        - order notes",
                "  cart               - show cart",
                "  submit             - place the order",
            ]
        lines += [
            "  refresh | r        - reload orders now",
            "  help | h | ?       - this help",
            "  exit | quit        - leave",
        ]
        return "\n".join(lines)


def _print_result(result: Dict[str, Any]) -> None:
    if result.get("ok"):
        data = result.get("data")
        if isinstance(data, str):
            print(data)
        elif data and "order_id" in data:
            print(f"Order {data['order_id'][:SHORT_ID]}: {data.get('status', 'created')}")
    else:
        print(f"Error: {result.get('error')}")
        if result.get("usage"):
            print(result["usage"])


async def run_board(role: StaffRole) -> None:
    """Run an interactive board for ``role`` until exit or end of input"""
    store = build_order_store()
    controller: Optional[BoardController] = None

    def redraw(_orders):
        if controller is not None:
            print("\033[2J\033[H", end="")
            print(controller.render())

    synchronizer = SYNCHRONIZERS[role](
        store,
        on_change=redraw,
        on_write_error=lambda e: print(f"Status change failed and was reverted: {e}")
    )
    session = OrderAssemblySession(store) if role == StaffRole.CASHIER else None
    controller = BoardController(synchronizer, session)

    try:
        async with synchronizer:
            redraw(synchronizer.orders)
            while True:
                line = await asyncio.to_thread(sys.stdin.readline)
                if not line:
                    break
                result = await controller.handle_cmd(line)
                if result.get("data") == {"exit": True}:
                    break
                _print_result(result)
    finally:
        await store.aclose()


def main(argv: List[str] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    roles = [r.value for r in SYNCHRONIZERS]
    if len(argv) != 1 or argv[0] not in roles:
        print(f"usage: run_board.py {{{'|'.join(roles)}}}")
        return 2
    setup_logging()
    logger.info("Starting %s board", argv[0])
    try:
        asyncio.run(run_board(StaffRole(argv[0])))
    except KeyboardInterrupt:
        print("\nBoard stopped by user")
    return 0
