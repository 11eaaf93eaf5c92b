from django.urls import path
from . import views

app_name = 'partnerships'

urlpatterns = [
    # GET / POST / DELETE - caller's own partnership
    path('', views.my_partnership, name='my-partnership'),

    # Admin overrides
    path('admin/link/', views.admin_link, name='admin-link'),
    path('admin/unlink/', views.admin_unlink, name='admin-unlink'),
    path('admin/force/', views.admin_force_change, name='admin-force'),
]
