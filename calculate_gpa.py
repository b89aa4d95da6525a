#!/usr/bin/env python3
"""
Simple wrapper to calculate the GPA for a saved student record
Usage: python3 calculate_gpa.py <record.json>

The record is the JSON produced by GPARecordManager.dump_state (or the web
app's saved store state).
"""

import json
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from pondera.config import get_settings
from pondera.grade_utils import get_gpa_classification
from pondera.performance import calculate_annual_performance_metrics, gpa_evolution_frame
from pondera.record_manager import GPARecordManager, NoValidGradesError


def main() -> int:
    if len(sys.argv) < 2:
        print("ERROR: Missing arguments")
        print("Usage: python3 calculate_gpa.py <record.json>")
        return 1

    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level))

    record_path = Path(sys.argv[1]).expanduser()
    print(f"📂 Loading record: {record_path}")
    with open(record_path, encoding="utf-8") as f:
        state = json.load(f)

    manager = GPARecordManager(settings=settings)
    manager.load_state(state)

    try:
        result = manager.calculate_gpa()
    except NoValidGradesError as e:
        print(f"❌ {e}")
        return 1

    classification = get_gpa_classification(result.unweighted)

    print(f"\n🎯 Cumulative GPAs:")
    print(f"  Unweighted GPA:  {result.unweighted:.2f}")
    print(f"  Weighted GPA:    {result.weighted:.2f}")
    print(f"  CORE GPA:        {result.core_only:.2f}")
    print(f"  Total Credits:   {result.total_credits:.1f}")
    print(f"  {classification.icon} {classification.label} ({classification.description})")

    print(f"\n📊 Yearly Breakdown:")
    print(gpa_evolution_frame(result).to_string(index=False, float_format="%.2f"))

    print(f"\n📈 Completion:")
    for record in manager.record.yearly_records:
        metrics = calculate_annual_performance_metrics(record)
        print(
            f"  {record.year}º ano: {metrics.completed_subjects_count}/"
            f"{metrics.total_subjects_count} subjects ({metrics.completion_rate:.0f}%)"
        )

    print(f"\n📝 Calculation Log:")
    for log_entry in manager.get_calculation_log():
        print(f"  {log_entry}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
