from rest_framework.throttling import SimpleRateThrottle


class _ClientRateThrottle(SimpleRateThrottle):
    """Rate limit keyed on the client address, logged in or not."""

    def get_cache_key(self, request, view):
        return self.cache_format % {'scope': self.scope, 'ident': self.get_ident(request)}


class LoginRateThrottle(_ClientRateThrottle):
    scope = 'login'


class RegistrationRateThrottle(_ClientRateThrottle):
    scope = 'registration'


class SignupRateThrottle(_ClientRateThrottle):
    scope = 'signup'
