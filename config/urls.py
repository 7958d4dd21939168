from django.contrib import admin
from django.urls import path, include
from core.views import health
from novels.views import CronPublishView

from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),
    path('accounts/', include('allauth.urls')),
    path("api/wallet/", include("wallet.urls", namespace="wallet")),
    path("api/novels/", include("novels.urls", namespace="novels")),
    path("api/notifications/", include("notifications.urls", namespace="notifications")),
    path("api/cron/publish/", CronPublishView.as_view(), name="cron-publish"),
    path("health", health),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=getattr(settings, "MEDIA_ROOT", ""))
