"""CLI del board de notas local (vista mínima sobre NoteBoard).

Uso típico:
  memo-board list --category Work --view list
  memo-board add "Comprar pan" --content "- pan" --priority high --category Tasks
  memo-board edit 1700000000000 --title "Nuevo título"
  memo-board delete 1700000000000
  memo-board move 3 1

Características:
  - Lee una vez el almacenamiento local (`--storage`, por defecto BOARD_STORAGE_PATH).
  - Cada mutación se persiste al momento; los avisos se imprimen en stderr.
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from memo_board.core.config import settings
from memo_board.core.logging import setup_logging
from memo_board.domain.notes.schemas import CATEGORIES, PRIORITIES, Note
from memo_board.infrastructure.storage.local_storage import LocalStorage
from memo_board.services.board_service import NoteBoard


def _render(notes: List[Note], view: str) -> str:
    lines: List[str] = []
    for n in notes:
        day = n.created_at.strftime("%b %d, %Y")
        if view == "list":
            lines.append(f"{n.id}  [{n.priority:<6}] {n.category:<8} {day}  {n.title}")
        else:
            lines.append(f"┌ {n.title}  ({n.id})")
            lines.append(f"│ {n.category} · {n.priority} · {day}")
            for row in (n.content or "").splitlines():
                lines.append(f"│ {row}")
            lines.append("└")
    return "\n".join(lines)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="memo-board", description="Board de notas local")
    ap.add_argument("--storage", default=settings.board_storage_path, help="Archivo JSON de almacenamiento local")
    ap.add_argument("--key", default=settings.board_storage_key, help="Clave de almacenamiento (por usuario, si se desea)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_list = sub.add_parser("list", help="Lista notas visibles")
    p_list.add_argument("--category", choices=CATEGORIES)
    p_list.add_argument("--priority", choices=PRIORITIES)
    p_list.add_argument("--date", help="Día calendario YYYY-MM-DD")
    p_list.add_argument("--view", choices=("grid", "list"), default="grid")

    p_add = sub.add_parser("add", help="Agrega una nota al inicio")
    p_add.add_argument("title")
    p_add.add_argument("--content", default="")
    p_add.add_argument("--priority", choices=PRIORITIES, default="medium")
    p_add.add_argument("--category", choices=CATEGORIES, default="Personal")

    p_edit = sub.add_parser("edit", help="Edita una nota existente")
    p_edit.add_argument("id")
    p_edit.add_argument("--title")
    p_edit.add_argument("--content")
    p_edit.add_argument("--priority", choices=PRIORITIES)
    p_edit.add_argument("--category", choices=CATEGORIES)

    p_del = sub.add_parser("delete", help="Elimina una nota")
    p_del.add_argument("id")

    p_move = sub.add_parser("move", help="Mueve ACTIVE_ID a la posición de OVER_ID")
    p_move.add_argument("active_id")
    p_move.add_argument("over_id")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    setup_logging(settings.log_level)
    board = NoteBoard(LocalStorage(args.storage), key=args.key).open()
    code = 0

    if args.cmd == "list":
        board.set_view(args.view)
        if board.set_filters(category=args.category, priority=args.priority, date=args.date) is None:
            code = 1
        else:
            print(board.count_label)
            out = _render(board.visible_notes, board.view)
            if out:
                print(out)
    elif args.cmd == "add":
        note = board.add_note(args.title, args.content, args.priority, args.category)
        if note is None:
            code = 1
        else:
            print(note.id)
    elif args.cmd == "edit":
        current = board.find(args.id)
        if current is None:
            print(f"Nota no encontrada: {args.id}", file=sys.stderr)
            code = 1
        else:
            changes = {
                k: v
                for k, v in {
                    "title": args.title,
                    "content": args.content,
                    "priority": args.priority,
                    "category": args.category,
                }.items()
                if v is not None
            }
            if not board.edit_note(current.model_copy(update=changes)):
                code = 1
    elif args.cmd == "delete":
        if not board.delete_note(args.id):
            print(f"Nota no encontrada: {args.id}", file=sys.stderr)
            code = 1
    elif args.cmd == "move":
        board.drag_end(args.active_id, args.over_id)

    for notice in board.drain_notices():
        print(f"[{notice.level}] {notice.message}", file=sys.stderr)
    return code


if __name__ == "__main__":
    sys.exit(main())
