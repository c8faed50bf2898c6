import argparse
import json
import sys

import yaml

from application.exceptions import MalformedExerciseError
from backend.core.content_matrix import build_content_matrix
from backend.core.normalize import normalize_exercise
from backend.core.smart_swap import diagnose_smart_swap_gaps
from backend.core.task_list import generate_task_list


def _load_exercises(documents, language="he"):
    """Normalize exported documents; malformed ones are reported on stderr and skipped."""
    if isinstance(documents, dict):
        # {id: document} export
        documents = [{"id": key, **value} for key, value in documents.items()]
    exercises = []
    for document in documents:
        exercise_id = document.get("id", "") if isinstance(document, dict) else ""
        try:
            exercises.append(normalize_exercise(exercise_id, document, language=language))
        except MalformedExerciseError as e:
            print(f"Warning: skipping malformed exercise {exercise_id!r}: {e}", file=sys.stderr)
    return exercises


def _matrix_report(exercises, language):
    rows = build_content_matrix(exercises, language)
    return {
        "count": len(rows),
        "totalCriticalGaps": sum(row.critical_gap_count for row in rows),
        "totalWorkflowGaps": sum(row.workflow_gap_count for row in rows),
        "rows": [
            {
                "exerciseId": row.exercise_id,
                "name": row.name,
                "readiness": row.production_readiness.status.value,
                "criticalGapCount": row.critical_gap_count,
                "workflowGapCount": row.workflow_gap_count,
                "gaps": row.gaps,
            }
            for row in rows
        ],
    }


def _tasks_report(exercises, language):
    tasks = generate_task_list(build_content_matrix(exercises, language))
    return {"total": tasks.total, **tasks.model_dump(by_alias=True, mode="json")}


def _smart_swap_report(exercises, language):
    diagnosis = diagnose_smart_swap_gaps(exercises)
    return {
        "missing": [e.id for e in diagnosis.missing],
        "autoAssignable": {a.exercise.id: a.suggested_id for a in diagnosis.auto_assignable},
        "manualOnly": [e.id for e in diagnosis.manual_only],
    }


REPORTS = {
    "matrix": _matrix_report,
    "tasks": _tasks_report,
    "smart-swap": _smart_swap_report,
}


def main():
    parser = argparse.ArgumentParser(description="Content production reports for an exercise catalog export")
    parser.add_argument("input", help="Input JSON file path (list of documents or {id: document})")
    parser.add_argument("report", nargs="?", choices=sorted(REPORTS), default="matrix", help="Report to print")
    parser.add_argument("-f", "--format", choices=["json", "yaml"], default="json", help="Output format")
    parser.add_argument("-o", "--output", help="Output file path (default: stdout)")
    parser.add_argument("-l", "--language", choices=["he", "en", "es"], default="he", help="Language of names and collapsed localized texts")

    args = parser.parse_args()

    try:
        with open(args.input, 'r', encoding='utf-8') as f:
            documents = json.load(f)

        exercises = _load_exercises(documents, args.language)
        report = REPORTS[args.report](exercises, args.language)

        if args.format == "yaml":
            text = yaml.safe_dump(report, allow_unicode=True, sort_keys=False)
        else:
            text = json.dumps(report, ensure_ascii=False, indent=2)

        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(text)
        else:
            print(text)

    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        sys.exit(1)
    except (TypeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
