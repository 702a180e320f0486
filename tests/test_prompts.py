import unittest

from resume_studio.ai.types import RAW_TEXT, InlineAttachment, NoAttachment
from resume_studio.services import prompts


class PromptBuilderTests(unittest.TestCase):
    def test_truncate(self):
        self.assertEqual(prompts.truncate("  abcdef  ", 3), "abc")
        self.assertEqual(prompts.truncate(None, 3), "")

    def test_job_match_truncates_each_field(self):
        request = prompts.build_job_match_request("R" * 6000, "J" * 7000)
        self.assertIn("R" * 5000, request.prompt)
        self.assertNotIn("R" * 5001, request.prompt)
        self.assertNotIn("J" * 5001, request.prompt)
        self.assertEqual(request.expects.shape, prompts.JOB_MATCH)
        self.assertIsInstance(request.attachment, NoAttachment)

    def test_cover_letter_expects_raw_text(self):
        request = prompts.build_cover_letter_request("resume", "jd")
        self.assertEqual(request.expects, RAW_TEXT)
        self.assertFalse(request.expects.is_json)

    def test_expected_shapes(self):
        cases = [
            (prompts.build_resume_analysis_request("text"), prompts.RESUME_ANALYSIS),
            (prompts.build_linkedin_request("text"), prompts.LINKEDIN_PROFILE),
            (prompts.build_interview_questions_request("jd"), prompts.INTERVIEW_QUESTIONS),
            (prompts.build_answer_evaluation_request("q", "a"), prompts.ANSWER_EVALUATION),
            (prompts.build_structured_resume_request("text"), prompts.STRUCTURED_RESUME),
        ]
        for request, shape in cases:
            with self.subTest(task=request.task):
                self.assertTrue(request.expects.is_json)
                self.assertEqual(request.expects.shape, shape)

    def test_file_analysis_carries_attachment(self):
        attachment = InlineAttachment(data=b"%PDF-1.4", mime_type="application/pdf")
        request = prompts.build_resume_file_analysis_request(attachment)
        self.assertIs(request.attachment, attachment)
        self.assertEqual(request.expects.shape, prompts.RESUME_ANALYSIS)

    def test_optional_context_is_omitted_when_blank(self):
        request = prompts.build_interview_questions_request("Go developer", resume_text="   ")
        self.assertNotIn("CANDIDATE RESUME", request.prompt)
        request = prompts.build_answer_evaluation_request("q", "a", job_description="Go developer")
        self.assertIn("JOB DESCRIPTION", request.prompt)


if __name__ == "__main__":
    unittest.main()
