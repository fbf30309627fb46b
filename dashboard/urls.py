from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    # HTML views
    path('', views.dashboard_home, name='home'),
    path('blog/', views.blog_list, name='blog_list'),
    path('blog/new/', views.BlogPostFormView.as_view(), name='blog_create'),
    path('blog/<uuid:pk>/', views.BlogPostFormView.as_view(), name='blog_edit'),
    path('blog/<uuid:pk>/publish/', views.blog_toggle_publish, name='blog_toggle_publish'),
    path('blog/<uuid:pk>/delete/', views.BlogPostDeleteView.as_view(), name='blog_delete'),
    path('villas/', views.villa_list, name='villa_list'),
    path('villas/new/', views.VillaFormView.as_view(), name='villa_create'),
    path('villas/<uuid:pk>/', views.VillaFormView.as_view(), name='villa_edit'),
    path('villas/<uuid:pk>/delete/', views.VillaDeleteView.as_view(), name='villa_delete'),

    # API views
    path('api/villas/', views.VillaListAPIView.as_view(), name='villa_list_api'),
    path('api/blog/', views.BlogPostListAPIView.as_view(), name='blog_list_api'),
    path('api/stats/', views.DashboardStatsView.as_view(), name='dashboard_stats'),
]
