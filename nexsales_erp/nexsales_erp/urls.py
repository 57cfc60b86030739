from django.urls import include, path

urlpatterns = [
    path('api/assistant/', include('apps.assistant.urls')),
    path('api/inventory/', include('apps.inventory.urls')),
]
