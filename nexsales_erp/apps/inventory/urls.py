from django.urls import path
from . import views

urlpatterns = [
    path('products/', views.ProductListView.as_view(), name='product-list'),
    path('products/<str:product_id>/', views.ProductDetailView.as_view(), name='product-detail'),
    path('customers/', views.CustomerListView.as_view(), name='customer-list'),
    path('customers/<str:customer_id>/', views.CustomerDetailView.as_view(), name='customer-detail'),
    path('orders/', views.OrderListView.as_view(), name='order-list'),
    path('orders/<str:order_id>/status/', views.OrderStatusView.as_view(), name='order-status'),
    path('reports/', views.ReportView.as_view(), name='inventory-report'),
    path('restock/', views.RestockView.as_view(), name='restock'),
]
