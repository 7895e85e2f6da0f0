"""
Default documents written for a user on first load, and the starter question bank.
"""
from typing import Any, Dict, List

from schemas.learning import LearningLesson, LearningModule, LearningPath
from schemas.project import Project, SubTask, TutorialStep


def _step(step_id: str, title: str, description: str, *sub_tasks: tuple) -> TutorialStep:
    return TutorialStep(
        id=step_id,
        title=title,
        description=description,
        subTasks=[
            SubTask(id=f"{step_id}-{i}", title=t, description=d)
            for i, (t, d) in enumerate(sub_tasks, start=1)
        ],
    )


def default_projects() -> List[Project]:
    return [
        Project(
            id="build-a-personal-portfolio-website",
            title="Build a Personal Portfolio Website",
            description="Create a personal portfolio to showcase your skills and projects using React and Tailwind CSS.",
            image="https://placehold.co/600x400/7c3aed/ffffff.png",
            dataAiHint="portfolio website",
            tags=["TypeScript", "React", "Next.js", "Tailwind CSS", "Easy"],
            skills=["Component Composition", "Responsive Design", "Static Deployment"],
            steps=[
                _step("step-1", "Setup Your Development Environment",
                      "Install Node.js and scaffold a new Next.js application.",
                      ("Install Node.js", "Install the current LTS release of Node.js and npm."),
                      ("Create the Next.js App", "Scaffold the project with TypeScript, Tailwind and ESLint enabled.")),
                _step("step-2", "Create the Header and Footer",
                      "Add shared navigation and footer components.",
                      ("Build the Header", "Create a header with links to the projects and contact sections."),
                      ("Build the Footer", "Create a footer with social links and copyright.")),
                _step("step-3", "Design the Hero Section",
                      "Introduce yourself to visitors on the landing page.",
                      ("Write the Hero Markup", "Add a hero section with your name and a short tagline.")),
                _step("step-4", "Showcase Your Projects",
                      "List your work with reusable project cards.",
                      ("Create the ProjectCard Component", "Build a card that shows a project's title and description."),
                      ("Render the Project Grid", "Lay out project cards in a responsive grid.")),
                _step("step-5", "Deploy to the Web",
                      "Publish the portfolio with a static hosting provider.",
                      ("Push to GitHub", "Initialise a git repository and push it to GitHub."),
                      ("Deploy with Vercel", "Connect the repository to Vercel and deploy.")),
            ],
        ),
        Project(
            id="create-a-weather-app",
            title="Create a Weather App",
            description="Build a weather application that fetches and displays real-time weather data from an API.",
            image="https://placehold.co/600x400/34d399/115e59.png",
            dataAiHint="weather app",
            tags=["JavaScript", "React", "REST API", "Easy"],
            skills=["API Fetching", "Async State", "Browser Geolocation"],
            steps=[
                _step("step-1", "Get API Key",
                      "Register with a weather data provider.",
                      ("Sign Up for OpenWeatherMap", "Create a free account and generate an API key.")),
                _step("step-2", "Design the UI",
                      "Create the search form and the results area.",
                      ("Add the City Input", "Add a controlled text input and a submit button."),
                      ("Add the Results Panel", "Reserve an area that renders the weather data.")),
                _step("step-3", "Fetch Weather Data",
                      "Call the weather API for the requested city.",
                      ("Implement the API Call", "Fetch current weather for a city and store it in state."),
                      ("Handle Errors", "Show a message when the city is unknown or the request fails.")),
                _step("step-4", "Display Weather Data",
                      "Render temperature, conditions and an icon.",
                      ("Render the Weather Card", "Display temperature, humidity and a condition icon.")),
                _step("step-5", "Add Geolocation",
                      "Load the weather for the user's current position.",
                      ("Request the User's Location", "Use the Geolocation API to get coordinates on load.")),
            ],
        ),
        Project(
            id="task-management-app",
            title="Task Management App",
            description="A to-do application with create, complete and delete operations and persistent storage.",
            image="https://placehold.co/600x400/f59e0b/78350f.png",
            dataAiHint="task list",
            tags=["JavaScript", "React", "Medium"],
            skills=["State Management with React Hooks", "CRUD Operations", "Local Storage"],
            steps=[
                _step("step-1", "Project Setup",
                      "Create the application skeleton.",
                      ("Scaffold the App", "Create a new React application and clean up the template.")),
                _step("step-2", "Create Task Component",
                      "Render a single task with its completion state.",
                      ("Build the Task Component", "Show the task title with a checkbox and a delete button.")),
                _step("step-3", "Implement State Management",
                      "Hold the task list in component state.",
                      ("Store Tasks with useState", "Keep an array of tasks in the top-level component.")),
                _step("step-4", "Add CRUD Functionality",
                      "Create, toggle and delete tasks.",
                      ("Add Tasks", "Append a new task from the input field."),
                      ("Toggle Completion", "Flip a task's completed flag when its checkbox changes."),
                      ("Delete Tasks", "Remove a task from the list.")),
                _step("step-5", "Persist Data",
                      "Keep tasks across page reloads.",
                      ("Save to localStorage", "Write the task list to localStorage whenever it changes.")),
            ],
        ),
    ]


def default_learning_paths() -> List[LearningPath]:
    return [
        LearningPath(
            id="learn-python-basics-easy",
            title="Python Fundamentals",
            introduction="A first tour of Python: syntax, data structures and writing small programs.",
            topic="Python",
            difficulty="Easy",
            modules=[
                LearningModule(
                    id="module-1-basics",
                    title="Getting Started",
                    description="Install Python and write your first scripts.",
                    lessons=[
                        LearningLesson(id="lesson-1-1", title="Installing Python",
                                       description="Install the interpreter and run the REPL."),
                        LearningLesson(id="lesson-1-2", title="Variables and Types",
                                       description="Work with numbers, strings and booleans."),
                    ],
                ),
                LearningModule(
                    id="module-2-collections",
                    title="Collections",
                    description="Store and process groups of values.",
                    lessons=[
                        LearningLesson(id="lesson-2-1", title="Lists and Tuples",
                                       description="Create, index and slice sequences."),
                        LearningLesson(id="lesson-2-2", title="Dictionaries",
                                       description="Map keys to values and iterate over them."),
                    ],
                ),
            ],
        ),
    ]


DEFAULT_QUESTIONS: List[Dict[str, Any]] = [
    {"question": "Discuss the significance of 'Big O' notation in software development.",
     "category": "Technical", "type": "General", "difficulty": "Easy"},
    {"question": "Share a time you went above and beyond for a project.",
     "category": "Behavioral", "type": "General", "difficulty": "Easy"},
    {"question": "Compare and contrast REST and GraphQL.",
     "category": "Technical", "type": "Backend", "difficulty": "Medium"},
    {"question": "Describe a situation where you had a conflict with a coworker and how you handled it.",
     "category": "Behavioral", "type": "General", "difficulty": "Medium"},
    {"question": "Explain database indexing and why it's important for performance.",
     "category": "Technical", "type": "Backend", "difficulty": "Hard"},
    {"question": "What is the Virtual DOM and how does React use it to improve performance?",
     "category": "Technical", "type": "Frontend", "difficulty": "Medium"},
    {"question": "Tell me about a time you failed. What did you learn from it?",
     "category": "Behavioral", "type": "General", "difficulty": "Medium"},
    {"question": "How would you design a system like Twitter's news feed?",
     "category": "Technical", "type": "Full Stack", "difficulty": "Hard"},
]
