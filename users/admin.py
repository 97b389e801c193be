from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User, Profile

@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'name', 'is_staff', 'date_joined')
    list_filter = ('is_staff', 'is_superuser', 'is_active')
    search_fields = ('username', 'email', 'name')
    fieldsets = UserAdmin.fieldsets + (
        ('Showcase', {'fields': ('name',)}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Showcase', {'fields': ('name', 'email')}),
    )


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'college', 'contact_email', 'updated_at')
    search_fields = ('user__username', 'user__email', 'college')
