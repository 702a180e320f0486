import dataclasses
import json
import unittest
from unittest.mock import patch

from tests.support import ScriptedBackend, blank_pdf

from fastapi.testclient import TestClient

from resume_studio.ai.errors import ConfigurationError, UpstreamCallError
from resume_studio.ai.factory import get_orchestrator
from resume_studio.ai.orchestrator import ModelOrchestrator
from resume_studio.ai.selector import ActiveModel
from resume_studio.ai.types import InlineAttachment, NoAttachment, RemoteFileAttachment
from resume_studio.core.config import settings
from resume_studio.main import app
from resume_studio.parsing import ParsedDocument

MATCH_JSON = {
    "matchPercentage": 80,
    "matchStatus": "High",
    "missingSkills": [],
    "matchingSkills": ["Go", "Kubernetes"],
    "cultureFitScore": 8,
    "advice": "Apply now",
}

ANALYSIS_JSON = {
    "score": 72,
    "candidateName": "Ada Lovelace",
    "summary": "Backend engineer.",
    "strengths": ["Go"],
    "improvements": ["Quantify impact"],
    "rebuiltResume": {"personal": {"fullName": "Ada Lovelace"}},
}


async def _no_sleep(_: float) -> None:
    return None


class CareerApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _use_backend(self, backend: ScriptedBackend, models=("model-a", "model-b")) -> ModelOrchestrator:
        orchestrator = ModelOrchestrator(backend, list(models), ActiveModel(models[0]), sleep=_no_sleep)
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        return orchestrator

    def test_job_match_end_to_end(self):
        backend = ScriptedBackend({"model-a": [json.dumps(MATCH_JSON)]})
        self._use_backend(backend)

        response = self.client.post(
            "/api/job/match",
            json={
                "resumeText": "Experienced backend engineer, Go, Kubernetes",
                "jobDescription": "Looking for a Go developer with Kubernetes experience",
            },
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["message"], "Job analysis complete")
        self.assertEqual(body["analysis"], MATCH_JSON)
        prompt = backend.calls[0][1]
        self.assertIn("Experienced backend engineer, Go, Kubernetes", prompt)
        self.assertIn("Looking for a Go developer with Kubernetes experience", prompt)

    def test_job_match_requires_both_fields(self):
        self._use_backend(ScriptedBackend({"model-a": ["{}"]}))
        response = self.client.post("/api/job/match", json={"resumeText": "Go"})
        self.assertEqual(response.status_code, 422)

    def test_failover_is_invisible_to_caller(self):
        backend = ScriptedBackend(
            {
                "model-a": [UpstreamCallError("models/model-a is not found", status_code=404)],
                "model-b": ['```json\n{"questions": ["Tell me about Go."]}\n```'],
            }
        )
        orchestrator = self._use_backend(backend)

        response = self.client.post("/api/interview/generate", json={"jobDescription": "Go developer"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"questions": ["Tell me about Go."]})
        self.assertEqual(orchestrator.active.current, "model-b")

    def test_evaluate_answer(self):
        evaluation = {"score": 7, "feedback": "Good", "improvedAnswer": "Better"}
        self._use_backend(ScriptedBackend({"model-a": [json.dumps(evaluation)]}))

        response = self.client.post(
            "/api/interview/evaluate",
            json={"question": "Why Go?", "answer": "Because it is simple.", "jobDescription": "Go developer"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"evaluation": evaluation})

    def test_cover_letter_returns_raw_text(self):
        self._use_backend(ScriptedBackend({"model-a": ["  Dear Hiring Manager,\n\nI am excited...  "]}))

        response = self.client.post(
            "/api/job/cover-letter",
            json={"resumeText": "Go engineer", "jobDescription": "Go developer"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"coverLetter": "Dear Hiring Manager,\n\nI am excited..."})

    def test_linkedin_and_autofill(self):
        profile = {"headline": "Go Engineer", "about": "", "experience": [], "skills": ["Go"]}
        structured = {"personal": {"fullName": "Ada"}, "experience": [], "education": [], "skills": [], "projects": []}
        self._use_backend(ScriptedBackend({"model-a": [json.dumps(profile), json.dumps(structured)]}))

        linkedin = self.client.post("/api/resume/linkedin", json={"resumeText": "Go engineer"})
        autofill = self.client.post("/api/resume/autofill", json={"rawText": "Ada, Go engineer"})

        self.assertEqual(linkedin.status_code, 200)
        self.assertEqual(linkedin.json(), profile)
        self.assertEqual(autofill.status_code, 200)
        self.assertEqual(autofill.json(), structured)

    def test_all_models_exhausted_maps_to_503(self):
        self._use_backend(
            ScriptedBackend(
                {
                    "model-a": [UpstreamCallError("quota exceeded", status_code=429)],
                    "model-b": [UpstreamCallError("INTERNAL error", status_code=500)],
                }
            )
        )

        response = self.client.post("/api/job/match", json={"resumeText": "Go", "jobDescription": "Go"})

        self.assertEqual(response.status_code, 503)
        body = response.json()
        self.assertEqual(body["code"], "all_models_exhausted")
        self.assertIn("INTERNAL error", body["error"])
        self.assertEqual(response.headers.get("retry-after"), "30")

    def test_missing_credential_maps_to_500_with_hint(self):
        def _unconfigured():
            raise ConfigurationError("GEMINI_API_KEY is missing", hint="Set GEMINI_API_KEY.")

        app.dependency_overrides[get_orchestrator] = _unconfigured

        response = self.client.post("/api/job/match", json={"resumeText": "Go", "jobDescription": "Go"})

        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["code"], "ai_not_configured")
        self.assertEqual(body["hint"], "Set GEMINI_API_KEY.")

    def test_rejected_credential_maps_to_500(self):
        backend = ScriptedBackend({"model-a": [UpstreamCallError("API key not valid", status_code=400)]})
        self._use_backend(backend)

        response = self.client.post("/api/job/match", json={"resumeText": "Go", "jobDescription": "Go"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["code"], "invalid_credentials")
        self.assertEqual(backend.called_models, ["model-a"])

    def test_malformed_output_maps_to_502(self):
        self._use_backend(ScriptedBackend({"model-a": ["I cannot help with that."]}))

        response = self.client.post("/api/job/match", json={"resumeText": "Go", "jobDescription": "Go"})

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["code"], "malformed_model_output")


class ResumeUploadApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _use_backend(self, backend: ScriptedBackend) -> None:
        orchestrator = ModelOrchestrator(backend, ["model-a"], ActiveModel("model-a"), sleep=_no_sleep)
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator

    def test_text_pdf_is_analyzed_from_extracted_text(self):
        backend = ScriptedBackend({"model-a": [json.dumps(ANALYSIS_JSON)]})
        self._use_backend(backend)
        text = "Ada Lovelace\nBackend engineer with Go and Kubernetes. " * 20
        parsed = ParsedDocument(text=text, page_count=1)

        with patch("resume_studio.services.career_service.extract_pdf_text", return_value=parsed):
            response = self.client.post(
                "/api/resume/analyze",
                files={"resume": ("resume.pdf", b"%PDF-1.4 stub", "application/pdf")},
            )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["message"], "Resume analyzed successfully")
        self.assertEqual(body["fileName"], "resume.pdf")
        self.assertFalse(body["usedAttachment"])
        self.assertTrue(body["extractedText"].endswith("..."))
        self.assertEqual(len(body["extractedText"]), 503)
        self.assertEqual(body["analysis"], ANALYSIS_JSON)
        self.assertIsInstance(backend.calls[0][2], NoAttachment)

    def test_scanned_pdf_falls_back_to_inline_attachment(self):
        backend = ScriptedBackend({"model-a": [json.dumps(ANALYSIS_JSON)]})
        self._use_backend(backend)
        data = blank_pdf()

        response = self.client.post(
            "/api/resume/upload",
            files={"resume": ("scan.pdf", data, "application/pdf")},
        )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["usedAttachment"])
        attachment = backend.calls[0][2]
        self.assertIsInstance(attachment, InlineAttachment)
        self.assertEqual(attachment.mime_type, "application/pdf")
        self.assertEqual(attachment.data, data)

    def _post_scan(self, data: bytes, filename: str = "scan.pdf", content_type: str = "application/pdf"):
        small_inline = dataclasses.replace(settings, inline_attachment_max_bytes=10)
        with patch("resume_studio.services.career_service.settings", small_inline):
            return self.client.post(
                "/api/resume/analyze",
                files={"resume": (filename, data, content_type)},
            )

    def test_large_scan_is_uploaded_and_referenced_remotely(self):
        backend = ScriptedBackend({"model-a": [json.dumps(ANALYSIS_JSON)]})
        self._use_backend(backend)
        data = blank_pdf()

        response = self._post_scan(data)

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["usedAttachment"])
        self.assertEqual(backend.uploads, [(data, "application/pdf", "scan.pdf")])
        attachment = backend.calls[0][2]
        self.assertIsInstance(attachment, RemoteFileAttachment)
        self.assertEqual(attachment, RemoteFileAttachment(uri="files/1", mime_type="application/pdf"))

    def test_large_image_is_uploaded_with_its_mime_type(self):
        backend = ScriptedBackend({"model-a": [json.dumps(ANALYSIS_JSON)]})
        self._use_backend(backend)

        response = self._post_scan(b"\x89PNG\r\n\x1a\n" + b"\x00" * 64, filename="resume.png", content_type="image/png")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(backend.uploads), 1)
        self.assertEqual(backend.calls[0][2].mime_type, "image/png")

    def test_rejected_key_during_upload_maps_to_500(self):
        backend = ScriptedBackend(
            {"model-a": ["{}"]},
            upload_error=UpstreamCallError("Incorrect API key provided", status_code=401),
        )
        self._use_backend(backend)

        response = self._post_scan(blank_pdf())

        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["code"], "invalid_credentials")
        self.assertIn("GEMINI_API_KEY", body["hint"])
        self.assertEqual(backend.calls, [])

    def test_failed_upload_maps_to_503(self):
        backend = ScriptedBackend(
            {"model-a": ["{}"]},
            upload_error=UpstreamCallError("INTERNAL upload failed", status_code=500),
        )
        self._use_backend(backend)

        response = self._post_scan(blank_pdf())

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.headers["retry-after"], "30")
        body = response.json()
        self.assertEqual(body["code"], "all_models_exhausted")
        self.assertIn("INTERNAL upload failed", body["error"])
        self.assertEqual(backend.calls, [])

    def test_unsupported_file_type_is_422(self):
        self._use_backend(ScriptedBackend({"model-a": ["{}"]}))

        response = self.client.post(
            "/api/resume/analyze",
            files={"resume": ("notes.txt", b"hello", "text/plain")},
        )

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["code"], "document_unreadable")

    def test_empty_upload_is_400(self):
        self._use_backend(ScriptedBackend({"model-a": ["{}"]}))

        response = self.client.post(
            "/api/resume/analyze",
            files={"resume": ("resume.pdf", b"", "application/pdf")},
        )

        self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
