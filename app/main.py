"""
Console Front End for the Ledger

A thin text menu over the ledger core. Three screens:

    Home     D) Add Deposit  P) Make Payment  L) Ledger  X) Exit
    Ledger   A) All  D) Deposits  P) Payments  R) Reports  H) Home
    Reports  1) Month To Date  2) Previous Month  3) Year To Date
             4) Previous Year  5) Search by Vendor  6) Custom Search  0) Back

DESIGN PRINCIPLES:
1. The menu is an explicit state machine (MenuState)
2. Any error aborts the current action and returns to the same menu
3. Empty reports say so instead of printing a bare header
"""

import argparse
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, TextIO

from ledger.audit import configure_logging, create_correlation_id
from ledger.config import get_settings
from ledger.models.transaction import QueryResult, Transaction
from ledger.orchestrator import LedgerFlow, create_app_components
from ledger.queries import QueryExecutor
from ledger.services.storage import StorageError
from ledger.services.storage.codec import format_date, format_time
from ledger.validation import InvalidInputError, parse_search_criteria
from ledger.validation.inputs import DATE_HINT, DATETIME_HINT


TABLE_HEADER = "%-12s %-10s %-24s %-18s %10s"
TABLE_ROW = "%-12s %-10s %-24s %-18s %10.2f"
TABLE_RULE = "-" * 74

NO_MATCH_MESSAGES = {
    "all": "No transactions recorded yet.",
    "deposits": "No deposits recorded yet.",
    "payments": "No payments recorded yet.",
    "vendor": "No transactions found for that vendor.",
    "custom_search": "No transactions match the chosen criteria.",
}
NO_MATCH_DATES = "No transactions found for the selected dates."


class MenuState(str, Enum):
    """Screens of the console menu."""
    HOME = "home"
    LEDGER = "ledger"
    REPORTS = "reports"
    EXIT = "exit"


class LedgerConsole:
    """
    Interactive menu loop.

    Input and output are injectable so the loop can be driven from tests.
    """

    def __init__(
        self,
        ledger_flow: LedgerFlow,
        query_executor: QueryExecutor,
        read_line: Optional[Callable[[str], str]] = None,
        out: Optional[TextIO] = None,
    ):
        self._flow = ledger_flow
        self._queries = query_executor
        self._read_line = read_line or input
        self._out = out or sys.stdout
        self.state = MenuState.HOME

    def run(self) -> None:
        handlers = {
            MenuState.HOME: self._home_menu,
            MenuState.LEDGER: self._ledger_menu,
            MenuState.REPORTS: self._reports_menu,
        }
        while self.state != MenuState.EXIT:
            try:
                self.state = handlers[self.state]()
            except EOFError:
                self.state = MenuState.EXIT

    # Screens ----------------------------------------------------------------

    def _home_menu(self) -> MenuState:
        self._say()
        self._say("Welcome to TransactionApp")
        self._say("Choose an option:")
        self._say(" D) Add Deposit")
        self._say(" P) Make Payment (Debit)")
        self._say(" L) Ledger")
        self._say(" X) Exit")
        choice = self._ask("Your choice: ").strip().upper()

        if choice == "D":
            self._record(is_payment=False)
        elif choice == "P":
            self._record(is_payment=True)
        elif choice == "L":
            return MenuState.LEDGER
        elif choice == "X":
            return MenuState.EXIT
        else:
            self._say("Invalid option - please try again.")
        return MenuState.HOME

    def _ledger_menu(self) -> MenuState:
        self._say()
        self._say("Ledger Menu")
        self._say(" A) All Transactions")
        self._say(" D) Deposits Only")
        self._say(" P) Payments Only")
        self._say(" R) Reports")
        self._say(" H) Home")
        choice = self._ask("Your choice: ").strip().upper()

        if choice == "A":
            self._show(self._queries.list_all())
        elif choice == "D":
            self._show(self._queries.list_deposits())
        elif choice == "P":
            self._show(self._queries.list_payments())
        elif choice == "R":
            return MenuState.REPORTS
        elif choice == "H":
            return MenuState.HOME
        else:
            self._say("Invalid option - please try again.")
        return MenuState.LEDGER

    def _reports_menu(self) -> MenuState:
        self._say()
        self._say("Reports Menu")
        self._say(" 1) Month To Date")
        self._say(" 2) Previous Month")
        self._say(" 3) Year To Date")
        self._say(" 4) Previous Year")
        self._say(" 5) Search by Vendor")
        self._say(" 6) Custom Search")
        self._say(" 0) Back")
        choice = self._ask("Your choice: ").strip()

        if choice == "1":
            self._show(self._queries.report_month_to_date())
        elif choice == "2":
            self._show(self._queries.report_previous_month())
        elif choice == "3":
            self._show(self._queries.report_year_to_date())
        elif choice == "4":
            self._show(self._queries.report_previous_year())
        elif choice == "5":
            vendor = self._ask("Vendor name: ").strip()
            self._show(self._queries.report_by_vendor(vendor))
        elif choice == "6":
            self._custom_search()
        elif choice == "0":
            return MenuState.LEDGER
        else:
            self._say("Invalid option - please try again.")
        return MenuState.REPORTS

    # Actions ----------------------------------------------------------------

    def _record(self, is_payment: bool) -> None:
        correlation_id = create_correlation_id()
        raw_datetime = self._ask(f"Date & time ({DATETIME_HINT}): ")
        description = self._ask("Description: ")
        vendor = self._ask("Vendor: ")
        amount = self._ask("Amount (positive): ")

        try:
            self._flow.record_from_input(
                raw_datetime,
                description,
                vendor,
                amount,
                is_payment=is_payment,
                correlation_id=correlation_id,
            )
        except InvalidInputError as e:
            self._say(str(e))
            return
        except StorageError as e:
            self._say(f"Failed to write to file: {e}")
            return

        self._say("Payment recorded." if is_payment else "Deposit recorded.")

    def _custom_search(self) -> None:
        raw_start = self._ask(f"Start date ({DATE_HINT}, blank = none): ")
        raw_end = self._ask(f"End date   ({DATE_HINT}, blank = none): ")
        raw_description = self._ask("Description (blank = any): ")
        raw_vendor = self._ask("Vendor      (blank = any): ")
        raw_amount = self._ask("Amount      (blank = any): ")

        try:
            criteria = parse_search_criteria(
                start_date=raw_start,
                end_date=raw_end,
                description=raw_description,
                vendor=raw_vendor,
                amount=raw_amount,
            )
        except InvalidInputError as e:
            self._flow.log_invalid_input(e)
            self._say(str(e))
            return

        self._show(self._queries.custom_search(criteria))

    # Rendering --------------------------------------------------------------

    def _show(self, result: QueryResult) -> None:
        if not result.success:
            self._say(result.error_message or "The report could not be run.")
            return

        self._say(TABLE_HEADER % ("Date", "Time", "Description", "Vendor", "Amount"))
        self._say(TABLE_RULE)
        if not result.data_found:
            self._say(NO_MATCH_MESSAGES.get(result.query_type, NO_MATCH_DATES))
            return
        for transaction in result.transactions:
            self._say(format_row(transaction))
        self._say(TABLE_RULE)
        self._say(f"{result.result_count} transaction(s), total {result.total:.2f}")

    def _ask(self, prompt: str) -> str:
        return self._read_line(prompt)

    def _say(self, text: str = "") -> None:
        print(text, file=self._out)


def format_row(transaction: Transaction) -> str:
    return TABLE_ROW % (
        format_date(transaction.date),
        format_time(transaction.time),
        transaction.description,
        transaction.vendor,
        transaction.rounded_amount,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Personal finance ledger")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="Transaction file to use (default: LEDGER_DATA_FILE or ./transactions.csv)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level_number, json_logs=settings.log_json)

    try:
        ledger_flow, query_executor = create_app_components(
            data_file=args.data_file,
            settings=settings,
        )
    except StorageError as e:
        print(f"Error reading data file: {e}", file=sys.stderr)
        return 1

    store = ledger_flow.store
    if store.created:
        print(f"Created new data file: {store.storage.location}")

    LedgerConsole(ledger_flow, query_executor).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
