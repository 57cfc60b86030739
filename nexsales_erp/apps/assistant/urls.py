from django.urls import path
from . import views

urlpatterns = [
    path('message/', views.AssistantMessageView.as_view(), name='assistant-message'),
    path('mock-data/', views.MockDataView.as_view(), name='assistant-mock-data'),
]
