from django.contrib import admin

from .models import Project, ProjectContributor, ProjectTag


class ProjectTagInline(admin.TabularInline):
    model = ProjectTag
    extra = 0


class ProjectContributorInline(admin.TabularInline):
    model = ProjectContributor
    extra = 0
    raw_id_fields = ('user',)


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ('title', 'created_by', 'likes_count', 'views_count', 'created_at')
    search_fields = ('title', 'description', 'created_by__email')
    list_filter = ('created_at',)
    raw_id_fields = ('created_by',)
    # counters are owned by projects.engagement
    readonly_fields = ('likes_count', 'views_count', 'created_at', 'updated_at')
    inlines = [ProjectTagInline, ProjectContributorInline]
