"""
Command-Line Presenter

Runs an encryption or decryption and prints the resulting trace one step
at a time, or as JSON. Messages can be given as hex of their 8-bit
character codes so that non-printable ciphertext can be fed back in.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .cipher_core.feistel_engine import FeistelEngine, Mode, validate_rounds
from .config import load_params
from .trace.steps import StepKind, Trace, TraceCursor

logger = logging.getLogger(__name__)


def text_to_hex(text: str) -> str:
    """Hex of the 8-bit character codes of text."""
    return text.encode('latin-1').hex()


def hex_to_text(value: str) -> str:
    """Inverse of text_to_hex."""
    try:
        return bytes.fromhex(value).decode('latin-1')
    except ValueError:
        raise ValueError(f"Not a valid hex string: {value!r}") from None


def render_trace(trace: Trace) -> str:
    """
    Render every step of a trace as readable text.

    Args:
        trace: The trace to render

    Returns:
        A multi-line string
    """
    lines = []
    cursor = TraceCursor(trace)
    total = len(trace)

    while True:
        step = cursor.current
        lines.append(f"Step {cursor.position + 1}/{total}: {step.operation}")
        lines.append(f"  {step.description}")

        if step.kind is StepKind.CONVERSION:
            lines.append(f"  Bits:        {step.bits}")
        elif step.kind is StepKind.ROUND:
            lines.append(f"  Key used:    {step.round_key!r} (round key {step.key_index})")
            lines.append(f"  Mixed:       {step.mix_output}")
            lines.append(f"  Left:        {step.left_out}")
            lines.append(f"  Right:       {step.right_out}")
            lines.append(f"  {step.action}")
        else:
            lines.append(f"  Left:        {step.left}")
            lines.append(f"  Right:       {step.right}")
            if step.kind is StepKind.FINAL:
                lines.append(f"  Result bits: {step.bits}")
                lines.append(f"  Result:      {step.text!r}")

        if cursor.at_end:
            break
        cursor.next()

    return "\n".join(lines)


def build_parser(params: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='feistelsim',
        description='Step through a toy Feistel cipher round by round'
    )
    parser.add_argument('mode', choices=[m.value for m in Mode], help='Direction of the transform')
    parser.add_argument('message', help='Plaintext or ciphertext')
    parser.add_argument('-k', '--key', required=True, help='Secret key (non-empty)')
    parser.add_argument('-r', '--rounds', type=int, default=params['rounds'],
                        help=f"Number of rounds, {params['min_rounds']}-{params['max_rounds']} "
                             f"(default: {params['rounds']})")
    parser.add_argument('--hex', action='store_true',
                        help='Read the message and print the result as hex of 8-bit codes')
    parser.add_argument('--json', action='store_true', help='Print the trace as JSON')
    parser.add_argument('--strict', action='store_true', default=params['strict_encoding'],
                        help='Reject characters above U+00FF instead of truncating them')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        params = load_params()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=params['log_level'])

    args = build_parser(params).parse_args(argv)

    try:
        message = hex_to_text(args.message) if args.hex else args.message
        rounds = validate_rounds(args.rounds, params['max_rounds'])
        engine = FeistelEngine(strict_encoding=args.strict)
        output, trace = engine.process(args.mode, message, args.key, rounds)
    except ValueError as e:
        # FeistelError and malformed hex both land here
        logger.debug(f"Rejected {args.mode} request: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.json:
        data = trace.to_dict()
        data['result'] = text_to_hex(output) if args.hex else output
        print(json.dumps(data, indent=2))
        return 0

    print(render_trace(trace))
    print()
    label = 'Ciphertext' if args.mode == Mode.ENCRYPT.value else 'Plaintext'
    print(f"{label}: {output!r}")
    print(f"{label} (hex): {text_to_hex(output)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
