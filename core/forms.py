from django import forms

from .models import Applicant
from .uploads import validate_resume


class ApplicationForm(forms.ModelForm):
    resume = forms.FileField(
        required=False,
        help_text="PDF, DOC or DOCX.",
        widget=forms.ClearableFileInput(attrs={"accept": ".pdf,.doc,.docx"}),
    )

    class Meta:
        model = Applicant
        fields = [
            "name",
            "email",
            "phone",
            "message",
        ]
        labels = {
            "name": "Full Name",
            "email": "Email Address",
            "message": "Your Mission (Cover Letter)",
        }
        widgets = {
            "name": forms.TextInput(attrs={"placeholder": "Clark Kent"}),
            "email": forms.EmailInput(attrs={"placeholder": "clark@dailyplanet.com"}),
            "message": forms.Textarea(attrs={"rows": 4, "placeholder": "Tell us why you're the hero we need..."}),
        }

    def __init__(self, *args, uploaded_resume=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.uploaded_resume = uploaded_resume
        self.fields["message"].required = True

    def clean_resume(self):
        file = self.cleaned_data.get("resume")
        if file:
            validate_resume(file)
        return file

    def clean(self):
        cleaned = super().clean()
        if not cleaned.get("resume") and self.uploaded_resume is None and "resume" not in self.errors:
            self.add_error("resume", "Please upload your resume first!")
        return cleaned
