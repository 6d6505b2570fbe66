from __future__ import annotations

import unittest

import support  # noqa: F401  (puts api-code on sys.path)

from domain import Subject, parse_subject
from models import ChatRequest, Enrollment, Student, StudentUpdate


class StudentDocumentTest(unittest.TestCase):
    def test_from_mongo_lifts_object_id(self) -> None:
        student = Student.from_mongo(
            {"_id": "abc", "name": "Lin", "email": "lin@school.test", "role": "student"}
        )

        self.assertEqual(student.student_id, "abc")
        self.assertEqual(student.to_mongo()["_id"], "abc")
        self.assertNotIn("password_hash", student.to_mongo())

    def test_update_query_sets_profile_fields(self) -> None:
        query = StudentUpdate(name="Lin", email="lin@school.test", phone=None).to_update_query()

        self.assertEqual(set(query), {"$set"})
        self.assertEqual(query["$set"]["name"], "Lin")
        self.assertIsNone(query["$set"]["phone"])
        self.assertIn("updated_at", query["$set"])

    def test_enrollment_completion(self) -> None:
        self.assertTrue(Enrollment(_id="e", student_id="s", course_id="c", progress=100).is_completed)
        self.assertFalse(Enrollment(_id="e", student_id="s", course_id="c", progress=99).is_completed)


class ChatRequestTest(unittest.TestCase):
    def test_completeness_requires_subject_and_text(self) -> None:
        self.assertFalse(ChatRequest(question="What is inertia?").is_complete)
        self.assertFalse(ChatRequest(subject=Subject.PHYSICS, question="   ").is_complete)
        self.assertTrue(ChatRequest(subject=Subject.PHYSICS, question="What is inertia?").is_complete)

    def test_parse_subject_is_case_insensitive_and_closed(self) -> None:
        self.assertEqual(parse_subject(" computer science "), Subject.COMPUTER_SCIENCE)
        self.assertIsNone(parse_subject("Alchemy"))
        self.assertIsNone(parse_subject(None))


if __name__ == "__main__":
    unittest.main()
