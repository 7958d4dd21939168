from django.contrib.auth import get_user_model
from allauth.socialaccount.adapter import DefaultSocialAccountAdapter
from allauth.account.models import EmailAddress

from .models import Profile


class SocialAccountAdapter(DefaultSocialAccountAdapter):
    """
    Đăng nhập Google:
    - Gộp vào tài khoản có cùng email nếu đã tồn tại (thay vì báo "email đã được dùng").
    - Tạo Profile (vai trò READER) với nickname lấy từ tên Google.
    """

    def pre_social_login(self, request, sociallogin):
        # Đã từng login Google thì bỏ qua
        if sociallogin.is_existing:
            return

        email = (sociallogin.user.email or "").strip().lower()
        if not email:
            return

        User = get_user_model()
        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            return

        EmailAddress.objects.get_or_create(
            user=user,
            email=user.email,
            defaults={"verified": True, "primary": True},
        )
        sociallogin.connect(request, user)

    def save_user(self, request, sociallogin, form=None):
        user = super().save_user(request, sociallogin, form)
        profile = Profile.for_user(user)
        if not profile.nickname:
            profile.nickname = self._nickname_from(sociallogin) or user.username
            profile.save(update_fields=["nickname", "updated_at"])
        return user

    @staticmethod
    def _nickname_from(sociallogin):
        data = sociallogin.account.extra_data or {}
        return (data.get("name") or data.get("given_name") or "").strip()[:100]
