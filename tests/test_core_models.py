# Tests for core.models dataclasses
import unittest

from core.models import (
    AnalysisReport,
    DetectedAlgorithm,
    classify_safety,
)


class TestCoreModels(unittest.TestCase):
    def test_detected_algorithm_frozen(self):
        a = DetectedAlgorithm("AES-256", "Secure", "Low", 100)
        self.assertEqual(a.name, "AES-256")
        self.assertTrue(getattr(a.__class__, "__dataclass_params__").frozen)

    def test_classify_safety_boundaries(self):
        self.assertEqual(classify_safety(100), "Good")
        self.assertEqual(classify_safety(80), "Good")
        self.assertEqual(classify_safety(79), "Caution")
        self.assertEqual(classify_safety(50), "Caution")
        self.assertEqual(classify_safety(49), "Danger")
        self.assertEqual(classify_safety(0), "Danger")

    def test_report_derived_fields(self):
        r = AnalysisReport(
            source_name="fw.bin",
            source_size_bytes=2048,
            timestamp="2024-01-01T00:00:00+00:00",
            safety_percentage=65,
            detected=(
                DetectedAlgorithm("AES-256", "Secure", "Low", 100),
                DetectedAlgorithm("SHA-1", "Weak", "High", 30),
            ),
            summary="Detected 2 cryptographic algorithms in firmware.",
        )
        self.assertEqual(r.safety_level, "Caution")
        self.assertEqual(r.size_label, "2.00 KB")
        self.assertEqual(r.algorithm_names(), ("AES-256", "SHA-1"))

    def test_report_dict_ignores_storage_keys(self):
        r = AnalysisReport(
            "fw.img", 10, "2024-01-01T00:00:00+00:00", 90,
            (DetectedAlgorithm("SHA-256", "Secure", "Low", 90),),
            "Detected 1 cryptographic algorithm in firmware.",
            assumed_baseline=False,
        )
        d = r.to_dict()
        self.assertEqual(d["safety_level"], "Good")
        self.assertEqual(d["detected"][0]["name"], "SHA-256")
        d["id"] = "abc"
        d["stored_at"] = "2024-01-02T00:00:00+00:00"
        self.assertEqual(AnalysisReport.from_dict(d), r)


if __name__ == "__main__":
    unittest.main()
