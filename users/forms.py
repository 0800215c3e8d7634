from django import forms


class LoginForm(forms.Form):
    """Simple login form capturing username and password."""

    username = forms.CharField()
    password = forms.CharField(widget=forms.PasswordInput)
