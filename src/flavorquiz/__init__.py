"""FlavorQuiz: answer grading for flavor-name study quizzes."""
