from django import forms


class SelectOutputFormat(forms.Form):
    """Choose the file format of an enhanced CV download."""

    FORMAT_CHOICES = [
        ("pdf", "PDF"),
        ("docx", "Word (.docx)"),
        ("txt", "Plain text"),
    ]

    outputFormat = forms.ChoiceField(choices=FORMAT_CHOICES, initial="pdf", label="Format")  # noqa: N815
    enhancedCV = forms.CharField(widget=forms.HiddenInput)  # noqa: N815
