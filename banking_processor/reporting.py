"""
Reporting Module

Renders a ProcessingResult as a plain-text summary report or JSON.
Formatting only: every figure comes from the result as computed.
"""

import json
from typing import List

from .amounts import format_amount
from .transactions import ProcessingResult, SystemRejection


def format_report(result: ProcessingResult, width: int = 40) -> str:
    """
    Build the text summary report for one processing run

    Args:
        result: Result of TransactionProcessor.process
        width: Width of the banner rules

    Returns:
        Multi-line report text
    """
    rule = "=" * width
    lines: List[str] = [rule, "BANKING SYSTEM - SUMMARY REPORT", rule, ""]

    account = result.account
    if account is not None:
        lines.append("📋 ACCOUNT INFORMATION:")
        lines.append(f"  Holder: {account.account_holder}")
        lines.append(f"  Number: {account.account_number}")
        lines.append(f"  Currency: {account.currency}")
        lines.append(f"  Initial Balance: {format_amount(account.initial_balance)}")
        lines.append(f"  Final Balance: {format_amount(account.balance)}")
        lines.append("")

        lines.append("✅ APPLIED TRANSACTIONS:")
        if result.applied:
            for applied in result.applied:
                lines.append(
                    f"  {applied.position}. {applied.transaction_type.value} → "
                    f"{format_amount(applied.amount)} {account.currency}"
                )
        else:
            lines.append("  (None)")
        lines.append("")

        lines.append("❌ REJECTED TRANSACTIONS:")
        if result.rejected:
            for rejection in result.rejected:
                lines.append(_format_rejection(rejection))
        else:
            lines.append("  (None)")
        lines.append("")

        lines.append("📊 STATISTICS:")
        lines.append(f"  Total: {result.total}")
        lines.append(f"  Applied: {len(result.applied)}")
        lines.append(f"  Rejected: {len(result.rejected)}")
        lines.append("")
    else:
        lines.append("⚠️  No account data processed due to error.")
        for rejection in result.rejected:
            lines.append(_format_rejection(rejection))

    lines.append("📝 AUDIT LOG:")
    lines.append(f"  {result.summary}")
    lines.append(rule)
    return "\n".join(lines)


def _format_rejection(rejection) -> str:
    if isinstance(rejection, SystemRejection):
        return f"  {rejection.error}: {rejection.message}"
    return f"  {rejection.position}. Reason: {rejection.reason}"


def result_to_json(result: ProcessingResult, indent: int = 2) -> str:
    """Serialize a result to JSON; Decimals become strings"""
    return json.dumps(result.to_dict(), indent=indent, default=str, ensure_ascii=False)
