from django.urls import path
from . import views

app_name = 'stats'

urlpatterns = [
    path('me/', views.participant_stats, name='my-stats'),  # Current user
    path('leaderboard/', views.leaderboard, name='leaderboard'),
    path('<uuid:participant_id>/', views.participant_stats, name='participant-stats'),
]
