import logging
import re
import uuid

from django.conf import settings
from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_GET, require_POST

from .forms import ApplicationForm
from .intake import SESSION_RESUME_KEY, IntakeError, SubmissionInFlight, submission_lock, submit_application
from .uploads import ProgressTracker, ResumeRejected, ResumeUploader, ResumeUploadError, StoredResume, UploadStatus


logger = logging.getLogger(__name__)

_UPLOAD_ID_RE = re.compile(r"^[A-Za-z0-9_-]{8,64}$")


def _site_base(request) -> str:
	base_url = getattr(settings, 'BASE_URL', '').rstrip('/')
	return f"{base_url}/" if base_url else request.build_absolute_uri('/')


def _session_resume(request) -> StoredResume | None:
	return StoredResume.from_session(request.session.get(SESSION_RESUME_KEY))


def _render_home(request, form: ApplicationForm | None = None, status: int = 200):
	uploaded = _session_resume(request)
	ctx = {
		'form': form or ApplicationForm(uploaded_resume=uploaded),
		'uploaded_resume': uploaded,
		'max_resume_mb': settings.RESUME_MAX_UPLOAD_MB,
	}
	return render(request, 'core/home.html', ctx, status=status)


def home(request):
	return _render_home(request)


@require_POST
def apply(request):
	"""Upload the resume if needed, then record the application and bounce back with a flash message."""
	uploaded = _session_resume(request)
	form = ApplicationForm(request.POST, request.FILES, uploaded_resume=uploaded)
	if not form.is_valid():
		messages.error(request, "Please check your details and try again.")
		return _render_home(request, form, status=400)

	resume_file = form.cleaned_data.get('resume')
	if resume_file:
		# A file attached to this request replaces any earlier upload
		uploaded = None

	if not request.session.session_key:
		request.session.save()
	uploader = ResumeUploader(base_url=_site_base(request))
	try:
		with submission_lock(request.session.session_key):
			submit_application(
				form.cleaned_data,
				uploader=uploader,
				resume_file=resume_file,
				uploaded=uploaded,
				user_agent=request.META.get('HTTP_USER_AGENT', ''),
			)
	except SubmissionInFlight as exc:
		messages.warning(request, exc.user_message)
		return redirect(f"{reverse('core:home')}#application-form")
	except ResumeRejected as exc:
		form.add_error('resume', exc)
		return _render_home(request, form, status=400)
	except ResumeUploadError as exc:
		messages.error(request, exc.user_message)
		return _render_home(request, form, status=502)
	except IntakeError as exc:
		if uploader.result is not None:
			# Keep the finished upload so a retry does not send the file again
			request.session[SESSION_RESUME_KEY] = uploader.result.as_session()
		messages.error(request, exc.user_message)
		return _render_home(request, form, status=502)

	request.session.pop(SESSION_RESUME_KEY, None)
	messages.success(request, "Application received! We'll be in touch.")
	return redirect(f"{reverse('core:home')}#application-form")


@require_POST
def upload_resume(request):
	"""Upload a resume ahead of the form submit and remember it in the session."""
	upload_id = (request.POST.get('upload_id') or '').strip()
	if not _UPLOAD_ID_RE.match(upload_id):
		upload_id = uuid.uuid4().hex
	tracker = ProgressTracker(upload_id)
	uploader = ResumeUploader(base_url=_site_base(request), tracker=tracker)
	try:
		stored = uploader.upload(request.FILES.get('resume'))
	except ResumeRejected as exc:
		return JsonResponse(
			{'upload_id': upload_id, 'status': uploader.status, 'progress': uploader.progress, 'error': exc.messages[0]},
			status=400,
		)
	except ResumeUploadError as exc:
		return JsonResponse(
			{'upload_id': upload_id, 'status': uploader.status, 'progress': uploader.progress, 'error': exc.user_message},
			status=502,
		)

	request.session[SESSION_RESUME_KEY] = stored.as_session()
	return JsonResponse({
		'upload_id': upload_id,
		'status': uploader.status,
		'progress': uploader.progress,
		'url': stored.url,
		'file_name': stored.file_name,
	})


@require_POST
def clear_resume(request):
	request.session.pop(SESSION_RESUME_KEY, None)
	if request.headers.get('Accept', '').startswith('application/json'):
		return JsonResponse({'status': UploadStatus.IDLE, 'progress': 0})
	return redirect(f"{reverse('core:home')}#application-form")


@require_GET
def upload_progress(request, upload_id: str):
	data = ProgressTracker.read(upload_id) or {'status': UploadStatus.IDLE, 'progress': 0}
	return JsonResponse({'upload_id': upload_id, **data})
